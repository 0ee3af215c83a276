"""Device-login launcher: run ``aws sso login`` and catch the verification URL.

The AWS CLI in ``--no-browser`` mode prints instructions followed by a URL
of the form ``https://device.sso.<region>.amazonaws.com/?user_code=XXXX-XXXX``
and then blocks until that code is approved. :func:`login_profile` reads the
child's stdout line by line, hands the first URL to the browser flow while
the child keeps polling, and returns once the child exits.
"""

from __future__ import annotations

import logging
import subprocess
from contextlib import closing
from pathlib import Path
from typing import Callable, Iterator, Optional, Sequence

from aws_sso_login.config import load_sso_sessions
from aws_sso_login.exceptions import (
    ConfigNotFoundError,
    FlowError,
    ProcessIOError,
    ProcessSpawnError,
    SsoLoginError,
)
from aws_sso_login.models import Settings
from aws_sso_login.output import print_data
from aws_sso_login.prompts import Prompter

logger = logging.getLogger(__name__)

USER_CODE_MARKER = "user_code"

BrowserLogin = Callable[[str, bool, Settings, Prompter], str]


def build_command(profile: str, aws_command: Sequence[str] = ("aws",)) -> list[str]:
    """Return the argv that starts a no-browser device login for *profile*."""
    return [*aws_command, "sso", "login", "--no-browser", "--sso-session", profile]


def extract_verification_url(line: str) -> Optional[str]:
    """Return the verification URL carried by *line*, if any.

    A line carries the URL when it contains ``user_code``. The URL is the
    whitespace-separated token containing the marker; when the marker is
    split across tokens the whole stripped line is used.
    """
    if USER_CODE_MARKER not in line:
        return None
    for token in line.split():
        if USER_CODE_MARKER in token:
            return token
    return line.strip()


def iter_output_lines(command: Sequence[str]) -> Iterator[str]:
    """Spawn *command* and yield its stdout lines until EOF.

    stdin is closed and stderr discarded. Closing the generator early
    terminates the child if it is still running.

    Raises:
        ProcessSpawnError: If the command cannot be started.
        ProcessIOError: If stdout cannot be read or decoded, or the child
            exits with a non-zero status.
    """
    try:
        proc = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            encoding="utf-8",
        )
    except OSError as exc:
        raise ProcessSpawnError(f"Failed to execute {command[0]}: {exc}") from exc

    assert proc.stdout is not None
    try:
        try:
            for line in proc.stdout:
                yield line.rstrip("\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise ProcessIOError(f"Failed to read {command[0]} output: {exc}") from exc
        returncode = proc.wait()
        if returncode != 0:
            raise ProcessIOError(f"{command[0]} exited with status {returncode}")
    finally:
        if proc.poll() is None:
            logger.debug("Terminating %s", command[0])
            proc.terminate()
            proc.wait()
        proc.stdout.close()


def login_profile(
    profile: str,
    gui: bool,
    settings: Settings,
    prompter: Prompter,
    browser_login: Optional[BrowserLogin] = None,
) -> Optional[str]:
    """Log in to the sso-session *profile*.

    Args:
        profile: sso-session name from the AWS config.
        gui: Show the browser window.
        settings: Resolved settings.
        prompter: Prompt provider handed to the browser flow.
        browser_login: Browser flow to run on the verification URL;
            defaults to :func:`aws_sso_login.flow.browser_login`.

    Returns:
        The portal status text, or ``None`` if the CLI finished without
        printing a verification URL (e.g. the cached token was still valid).

    Raises:
        ProcessSpawnError: If ``aws`` cannot be started.
        ProcessIOError: If its output cannot be read or it fails.
        FlowError: If the browser-driven flow fails.
    """
    if browser_login is None:
        from aws_sso_login.flow import browser_login

    print_data(f"Login: {profile}")
    status: Optional[str] = None
    handled = False

    command = build_command(profile, settings.aws_command)
    with closing(iter_output_lines(command)) as lines:
        for line in lines:
            logger.debug("aws: %s", line)
            if handled:
                continue
            url = extract_verification_url(line)
            if url is None:
                continue
            handled = True
            try:
                status = browser_login(url, gui, settings, prompter)
            except SsoLoginError:
                raise
            except Exception as exc:
                raise FlowError(f"Browser login failed: {exc}") from exc

    return status


def login_profile_select(
    gui: bool,
    settings: Settings,
    prompter: Prompter,
    config_path: Optional[Path] = None,
    browser_login: Optional[BrowserLogin] = None,
) -> Optional[str]:
    """Pick an sso-session from the AWS config and log in to it.

    A single session is used directly; several are offered through
    :meth:`Prompter.select_profile`.

    Raises:
        ConfigNotFoundError: If the config has no sso-session sections.
    """
    sessions = load_sso_sessions(config_path)
    if not sessions:
        raise ConfigNotFoundError(
            "No [sso-session] sections found in the AWS config, "
            "please run 'aws configure sso' first"
        )

    if len(sessions) == 1:
        profile = sessions[0]
    else:
        profile = prompter.select_profile(sessions)

    return login_profile(profile, gui, settings, prompter, browser_login)
