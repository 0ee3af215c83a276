"""Tests for the exception hierarchy and exit codes."""

from __future__ import annotations

import pytest

from aws_sso_login import exit_codes
from aws_sso_login.exceptions import (
    BrowserLaunchError,
    ConfigParseError,
    ElementTimeoutError,
    FlowError,
    FlowTimeoutError,
    NavigationError,
    ProcessIOError,
    ProviderError,
    SsoLoginError,
    UserInputError,
)


@pytest.mark.parametrize(
    ("exc_cls", "code"),
    [
        (SsoLoginError, exit_codes.EXIT_GENERIC_FAILURE),
        (UserInputError, exit_codes.EXIT_INVALID_INPUT),
        (ConfigParseError, exit_codes.EXIT_CONFIG_ERROR),
        (ProcessIOError, exit_codes.EXIT_PROCESS_ERROR),
        (BrowserLaunchError, exit_codes.EXIT_BROWSER_ERROR),
        (NavigationError, exit_codes.EXIT_BROWSER_ERROR),
        (FlowTimeoutError, exit_codes.EXIT_FLOW_ERROR),
        (ProviderError, exit_codes.EXIT_FLOW_ERROR),
    ],
)
def test_exit_codes(exc_cls, code) -> None:
    assert exc_cls("x").exit_code == code


def test_exit_code_override() -> None:
    assert FlowError("x", exit_code=42).exit_code == 42
    assert FlowError("x").exit_code == exit_codes.EXIT_FLOW_ERROR


def test_element_timeout_error() -> None:
    exc = ElementTimeoutError("input#i0116", 20.0)

    assert str(exc) == "Timed out after 20s waiting for element 'input#i0116'"
    assert exc.selector == "input#i0116"
    assert exc.timeout == 20.0
    assert isinstance(exc, FlowError)
    assert exc.exit_code == exit_codes.EXIT_FLOW_ERROR
