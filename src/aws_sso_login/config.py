"""Configuration: XDG paths, tool settings, and AWS config discovery.

This module handles everything aws-sso-login reads from disk:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.aws-sso-login-config/`` on macOS and Windows. See
  :func:`get_config_dir` and :func:`get_data_dir`.
* **Settings** -- a single :class:`~aws_sso_login.models.Settings` JSON
  file (``config.json``) with timeouts, browser options and portal
  selectors. See :func:`load_settings`.
* **Precedence resolution** -- :func:`resolve_settings` and
  :func:`resolve_profile` merge CLI flags, environment variables and the
  settings file.
* **AWS config** -- :func:`load_sso_sessions` lists the ``sso-session``
  sections of ``~/.aws/config`` (or ``$AWS_CONFIG_FILE``).
"""

from __future__ import annotations

import configparser
import json
import os
import platform
from pathlib import Path
from typing import Optional

from aws_sso_login.exceptions import ConfigNotFoundError, ConfigParseError
from aws_sso_login.models import Settings

_APP_NAME = "aws-sso-login"
_CONFIG_FILENAME = "config.json"
_BROWSER_DIRNAME = ".aws-sso-login"
_SSO_SESSION_PREFIX = "sso-session"


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows).

    Not ``~/.aws-sso-login``: that directory is the browser profile.
    """
    return Path.home() / f".{_APP_NAME}-config"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/aws-sso-login/`` (default
    ``~/.config/aws-sso-login/``). On macOS/Windows:
    ``~/.aws-sso-login-config/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/aws-sso-login/`` (default
    ``~/.local/share/aws-sso-login/``). On macOS/Windows:
    ``~/.aws-sso-login-config/logs/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "logs"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_browser_data_dir(settings: Settings) -> Path:
    """Return the persistent browser profile directory, creating it if necessary.

    Defaults to ``~/.aws-sso-login`` so cookies and the provider's
    "stay signed in" state survive between runs.

    Raises:
        ConfigNotFoundError: If no directory is configured and the home
            directory cannot be determined.
    """
    if settings.browser.user_data_dir:
        path = Path(settings.browser.user_data_dir).expanduser()
    else:
        path = _home_dir() / _BROWSER_DIRNAME
    path.mkdir(parents=True, exist_ok=True)
    return path


def _home_dir() -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        raise ConfigNotFoundError("Unable to find the user home directory") from exc


# --- Settings ---


def _settings_path() -> Path:
    """Path to the settings file."""
    return get_config_dir() / _CONFIG_FILENAME


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load tool settings from ``config.json``.

    Args:
        path: Explicit settings file. Defaults to
            ``<config_dir>/config.json``.

    Returns:
        The validated :class:`~aws_sso_login.models.Settings`. If the file
        does not exist, a default instance is returned.

    Raises:
        ConfigParseError: If the file contains invalid JSON or fails
            Pydantic validation.
    """
    if path is None:
        path = _settings_path()
    if not path.is_file():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigParseError(f"Invalid settings at {path}: {exc}") from exc


def resolve_settings(
    cli_provider: Optional[str] = None,
    cli_browser_dir: Optional[str] = None,
    settings_path: Optional[Path] = None,
) -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. CLI flags (``cli_provider``, ``cli_browser_dir``)
        2. Environment variables (``AWS_SSO_LOGIN_PROVIDER``,
           ``AWS_SSO_LOGIN_BROWSER_DIR``)
        3. Settings file
        4. Defaults
    """
    settings = load_settings(settings_path)

    env_provider = os.environ.get("AWS_SSO_LOGIN_PROVIDER")
    if cli_provider is not None:
        settings.provider = cli_provider
    elif env_provider:
        settings.provider = env_provider

    env_browser_dir = os.environ.get("AWS_SSO_LOGIN_BROWSER_DIR")
    if cli_browser_dir is not None:
        settings.browser.user_data_dir = cli_browser_dir
    elif env_browser_dir:
        settings.browser.user_data_dir = env_browser_dir

    return settings


def resolve_profile(cli_profile: Optional[str] = None) -> Optional[str]:
    """Return the sso-session named on the command line or in ``AWS_SSO_LOGIN_PROFILE``.

    Returns ``None`` when neither is set, meaning the session is picked
    from the AWS config.
    """
    if cli_profile:
        return cli_profile
    return os.environ.get("AWS_SSO_LOGIN_PROFILE") or None


# --- AWS config ---


def aws_config_path() -> Path:
    """Locate the AWS CLI config file.

    Honours ``$AWS_CONFIG_FILE`` like the AWS CLI does, falling back to
    ``~/.aws/config``.

    Raises:
        ConfigNotFoundError: If the home directory cannot be determined or
            the file does not exist.
    """
    env_path = os.environ.get("AWS_CONFIG_FILE")
    if env_path:
        path = Path(env_path).expanduser()
    else:
        path = _home_dir() / ".aws" / "config"
    if not path.is_file():
        raise ConfigNotFoundError(
            f"AWS config file not found at {path}, "
            "please run 'aws configure sso' first"
        )
    return path


def parse_sso_sessions(text: str) -> list[str]:
    """Return the names of all ``[sso-session <name>]`` sections in *text*.

    Names are returned in file order. Sections such as ``[profile dev]`` or
    ``[default]`` are ignored, as is a bare ``[sso-session]`` header.

    Raises:
        ConfigParseError: If *text* is not valid INI.
    """
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_string(text)
    except configparser.Error as exc:
        raise ConfigParseError(f"Invalid AWS config: {exc}") from exc

    sessions: list[str] = []
    for section in parser.sections():
        parts = section.split()
        if len(parts) >= 2 and parts[0] == _SSO_SESSION_PREFIX:
            sessions.append(parts[1])
    return sessions


def load_sso_sessions(path: Optional[Path] = None) -> list[str]:
    """Read the AWS config and list its sso-session names.

    Args:
        path: Explicit config file; defaults to :func:`aws_config_path`.

    Raises:
        ConfigNotFoundError: If the file cannot be found or read.
        ConfigParseError: If the file is not valid INI.
    """
    if path is None:
        path = aws_config_path()
    elif not path.is_file():
        raise ConfigNotFoundError(f"AWS config file not found at {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigNotFoundError(f"Cannot read AWS config {path}: {exc}") from exc
    return parse_sso_sessions(text)
