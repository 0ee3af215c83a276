"""Exception hierarchy for aws-sso-login.

All exceptions inherit from :class:`SsoLoginError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`aws_sso_login.exit_codes`. The CLI command catches ``SsoLoginError``
and exits with the appropriate code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

None of these errors are retried. The only recoverable condition in a login
attempt is an unrecognised page, which the router logs and polls past.

Subclass hierarchy::

    SsoLoginError (exit 1)
    +-- ConfigError             (exit 3)
    |   +-- ConfigNotFoundError
    |   +-- ConfigParseError
    +-- ProcessError            (exit 4)
    |   +-- ProcessSpawnError
    |   +-- ProcessIOError
    +-- BrowserError            (exit 5)
    |   +-- BrowserLaunchError
    |   +-- NavigationError
    +-- FlowError               (exit 6)
    |   +-- ElementTimeoutError
    |   +-- FlowTimeoutError
    |   +-- ProviderError
    +-- UserInputError          (exit 2)
"""

from aws_sso_login.exit_codes import (
    EXIT_BROWSER_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_FLOW_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_INPUT,
    EXIT_PROCESS_ERROR,
)


class SsoLoginError(Exception):
    """Base exception for all aws-sso-login errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`aws_sso_login.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SsoLoginError):
    """Raised for configuration problems."""

    exit_code = EXIT_CONFIG_ERROR


class ConfigNotFoundError(ConfigError):
    """Raised when the AWS config file (or the home directory) cannot be found,
    or when it defines no ``sso-session`` sections."""


class ConfigParseError(ConfigError):
    """Raised when the AWS config is not valid INI or the settings file is invalid."""


class ProcessError(SsoLoginError):
    """Raised for failures of the ``aws sso login`` child process."""

    exit_code = EXIT_PROCESS_ERROR


class ProcessSpawnError(ProcessError):
    """Raised when the child process cannot be started (e.g. ``aws`` not on PATH)."""


class ProcessIOError(ProcessError):
    """Raised when the child's output cannot be read or it exits with a non-zero status."""


class BrowserError(SsoLoginError):
    """Raised for browser lifecycle failures."""

    exit_code = EXIT_BROWSER_ERROR


class BrowserLaunchError(BrowserError):
    """Raised when Chromium cannot be launched with the persistent profile."""


class NavigationError(BrowserError):
    """Raised when the tab cannot navigate to the verification URL."""


class FlowError(SsoLoginError):
    """Raised when the browser-driven login flow fails."""

    exit_code = EXIT_FLOW_ERROR


class ElementTimeoutError(FlowError):
    """Raised when an expected page element never appears within its timeout.

    Covers both provider-side errors (wrong password page, blocked account)
    and page variants the provider strategy does not know about.

    Args:
        selector: The CSS selector that was awaited.
        timeout: The timeout in seconds that elapsed.
    """

    def __init__(self, selector: str, timeout: float):
        super().__init__(
            f"Timed out after {timeout:g}s waiting for element '{selector}'"
        )
        self.selector = selector
        self.timeout = timeout


class FlowTimeoutError(FlowError):
    """Raised when the page router exceeds its iteration cap or flow deadline."""


class ProviderError(FlowError):
    """Raised when no identity provider is registered under the requested name."""


class UserInputError(SsoLoginError):
    """Raised when an interactive prompt is aborted or receives invalid input."""

    exit_code = EXIT_INVALID_INPUT
