"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~aws_sso_login.exceptions.SsoLoginError` subclass.
Shell wrappers can inspect the exit code to tell a missing AWS config apart
from a login page that never showed up.

Example::

    $ aws-sso-login -p corp
    $ echo $?
    6   # EXIT_FLOW_ERROR -- an expected login page element never appeared
"""

EXIT_SUCCESS = 0
"""The login completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_INPUT = 2
"""Interactive input was aborted or invalid."""

EXIT_CONFIG_ERROR = 3
"""The AWS config or the tool's settings file is missing or malformed."""

EXIT_PROCESS_ERROR = 4
"""The ``aws`` CLI could not be started or its output could not be read."""

EXIT_BROWSER_ERROR = 5
"""The browser could not be launched or navigated."""

EXIT_FLOW_ERROR = 6
"""The browser-driven login flow failed (element timeout, flow budget exhausted)."""

EXIT_CANCELLED = 130
"""The run was interrupted with Ctrl-C."""
