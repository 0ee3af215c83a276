"""Typer application and CLI entry point for aws-sso-login.

The application has a single command: log in to an AWS SSO session. The
session comes from ``--profile``, ``$AWS_SSO_LOGIN_PROFILE``, or the
``[sso-session ...]`` sections of the AWS config (picked interactively when
there are several).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs a SIGINT handler and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`aws_sso_login.launcher`: Runs ``aws sso login`` and the browser flow.
    :mod:`aws_sso_login.config`: Settings and AWS config resolution.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from aws_sso_login import __version__
from aws_sso_login.exit_codes import EXIT_CANCELLED, EXIT_GENERIC_FAILURE, EXIT_SUCCESS


app = typer.Typer(
    name="aws-sso-login",
    help="Log in to AWS SSO by driving the device-code flow in a browser.",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"aws-sso-login {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)


@app.command()
def login(
    gui: bool = typer.Option(
        False, "--gui", "-g", help="Expose the browser."
    ),
    profile: Optional[str] = typer.Option(
        None, "--profile", "-p", help="AWS SSO session name."
    ),
    provider: Optional[str] = typer.Option(
        None, "--provider", help="Identity provider (default: microsoft)."
    ),
    aws_config: Optional[Path] = typer.Option(
        None, "--aws-config", help="AWS config file to read sso-sessions from."
    ),
    browser_dir: Optional[str] = typer.Option(
        None, "--browser-dir", help="Persistent browser profile directory."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Log in to an AWS SSO session.

    Runs ``aws sso login --no-browser``, opens the verification URL in a
    controlled browser and walks the identity provider's pages. You type
    the email and password and approve the MFA request; everything else is
    clicked for you.

    Raises:
        typer.Exit: With the error's exit code when the login fails.
    """
    from aws_sso_login.config import resolve_profile, resolve_settings
    from aws_sso_login.exceptions import SsoLoginError
    from aws_sso_login.launcher import login_profile, login_profile_select
    from aws_sso_login.output import (
        OutputManager,
        configure_logging,
        error,
        set_output,
        success,
    )
    from aws_sso_login.prompts import Prompter

    output = OutputManager(no_color=no_color, quiet=quiet, verbose=verbose)
    set_output(output)
    configure_logging(output)

    try:
        settings = resolve_settings(cli_provider=provider, cli_browser_dir=browser_dir)
        prompter = Prompter()
        session = resolve_profile(profile)
        if session is not None:
            status = login_profile(session, gui, settings, prompter)
        else:
            status = login_profile_select(gui, settings, prompter, aws_config)
    except SsoLoginError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if status is None:
        success("No browser login was needed.")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly.

    ``sys.exit`` unwinds the stack, so the browser session and the ``aws``
    child are released by their ``with`` blocks on the way out.
    """

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from aws_sso_login.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``aws-sso-login`` console script.

    Unhandled :class:`~aws_sso_login.exceptions.SsoLoginError` instances
    cause a clean exit with the error's ``exit_code``. All other exceptions
    produce a crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(EXIT_CANCELLED)
    except Exception as exc:
        from aws_sso_login.exceptions import SsoLoginError
        from aws_sso_login.output import error

        if isinstance(exc, SsoLoginError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
