"""Tests for aws_sso_login.config -- XDG paths, settings, precedence, AWS config."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from aws_sso_login.config import (
    aws_config_path,
    get_browser_data_dir,
    get_config_dir,
    get_data_dir,
    load_settings,
    load_sso_sessions,
    parse_sso_sessions,
    resolve_profile,
    resolve_settings,
)
from aws_sso_login.exceptions import ConfigError, ConfigNotFoundError, ConfigParseError
from aws_sso_login.models import Settings


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_json(path: Path, data: Any) -> None:
    """Write a dict as JSON to *path*, creating parent dirs."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def _raise_runtime_error(cls) -> Path:
    raise RuntimeError("Could not determine home directory.")


# ---------------------------------------------------------------------------
# Directory layout
# ---------------------------------------------------------------------------


class TestXDGPaths:
    def test_config_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("aws_sso_login.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_config_dir()
        assert result == tmp_path / ".config" / "aws-sso-login"
        assert result.is_dir()

    def test_config_dir_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        custom = tmp_path / "custom_config"
        monkeypatch.setattr("aws_sso_login.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CONFIG_HOME", str(custom))

        assert get_config_dir() == custom / "aws-sso-login"

    def test_data_dir_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("aws_sso_login.config._is_xdg_platform", lambda: True)
        monkeypatch.delenv("XDG_DATA_HOME", raising=False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        result = get_data_dir()
        assert result == tmp_path / ".local" / "share" / "aws-sso-login"
        assert result.is_dir()

    def test_fallback_dirs(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("aws_sso_login.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))

        assert get_config_dir() == tmp_path / ".aws-sso-login-config"
        assert get_data_dir() == tmp_path / ".aws-sso-login-config" / "logs"


class TestBrowserDataDir:
    def test_default_under_home(self, isolated_config: Path) -> None:
        result = get_browser_data_dir(Settings())

        assert result == isolated_config / "home" / ".aws-sso-login"
        assert result.is_dir()

    def test_configured_dir(self, isolated_config: Path) -> None:
        settings = Settings()
        settings.browser.user_data_dir = str(isolated_config / "profiles" / "work")

        result = get_browser_data_dir(settings)

        assert result == isolated_config / "profiles" / "work"
        assert result.is_dir()

    def test_no_home(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(Path, "home", classmethod(_raise_runtime_error))

        with pytest.raises(ConfigNotFoundError, match="home directory"):
            get_browser_data_dir(Settings())


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, isolated_config: Path) -> None:
        settings = load_settings()

        assert settings == Settings()
        assert settings.provider == "microsoft"
        assert settings.timeouts.approval == 180
        assert settings.portal.terminal_title == "AWS access portal"

    def test_reads_config_json(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "aws-sso-login" / "config.json",
            {"timeouts": {"approval": 300}, "browser": {"channel": "chrome"}},
        )

        settings = load_settings()

        assert settings.timeouts.approval == 300
        assert settings.timeouts.element == 20
        assert settings.browser.channel == "chrome"

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        _write_json(path, {"provider": "okta", "max_iterations": None})

        settings = load_settings(path)

        assert settings.provider == "okta"
        assert settings.max_iterations is None

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{not json")

        with pytest.raises(ConfigParseError, match="Invalid settings"):
            load_settings(path)

    def test_validation_failure(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        _write_json(path, {"timeouts": {"element": -1}})

        with pytest.raises(ConfigParseError) as excinfo:
            load_settings(path)
        assert excinfo.value.exit_code == 3


class TestResolveSettings:
    def test_defaults(self, isolated_config: Path) -> None:
        settings = resolve_settings()
        assert settings.provider == "microsoft"
        assert settings.browser.user_data_dir is None

    def test_file_value(self, isolated_config: Path) -> None:
        _write_json(
            isolated_config / "config" / "aws-sso-login" / "config.json",
            {"provider": "from-file"},
        )
        assert resolve_settings().provider == "from-file"

    def test_env_overrides_file(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        _write_json(
            isolated_config / "config" / "aws-sso-login" / "config.json",
            {"provider": "from-file", "browser": {"user_data_dir": "/from/file"}},
        )
        monkeypatch.setenv("AWS_SSO_LOGIN_PROVIDER", "from-env")
        monkeypatch.setenv("AWS_SSO_LOGIN_BROWSER_DIR", "/from/env")

        settings = resolve_settings()

        assert settings.provider == "from-env"
        assert settings.browser.user_data_dir == "/from/env"

    def test_cli_overrides_env(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AWS_SSO_LOGIN_PROVIDER", "from-env")
        monkeypatch.setenv("AWS_SSO_LOGIN_BROWSER_DIR", "/from/env")

        settings = resolve_settings(cli_provider="from-cli", cli_browser_dir="/from/cli")

        assert settings.provider == "from-cli"
        assert settings.browser.user_data_dir == "/from/cli"


class TestResolveProfile:
    def test_cli_wins(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_SSO_LOGIN_PROFILE", "env")
        assert resolve_profile("cli") == "cli"

    def test_env(self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AWS_SSO_LOGIN_PROFILE", "env")
        assert resolve_profile(None) == "env"

    def test_none(self, isolated_config: Path) -> None:
        assert resolve_profile(None) is None

    def test_empty_env_is_unset(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("AWS_SSO_LOGIN_PROFILE", "")
        assert resolve_profile(None) is None


# ---------------------------------------------------------------------------
# AWS config
# ---------------------------------------------------------------------------


class TestParseSsoSessions:
    def test_file_order_and_filtering(self) -> None:
        text = (
            "[default]\nregion = eu-west-1\n\n"
            "[sso-session prod]\nsso_start_url = https://prod.awsapps.com/start\n\n"
            "[profile dev]\nsso_session = dev\n\n"
            "[sso-session dev]\nsso_start_url = https://dev.awsapps.com/start\n"
        )
        assert parse_sso_sessions(text) == ["prod", "dev"]

    def test_bare_section_ignored(self) -> None:
        assert parse_sso_sessions("[sso-session]\nkey = value\n") == []

    def test_empty(self) -> None:
        assert parse_sso_sessions("") == []

    def test_percent_signs_are_literal(self) -> None:
        text = "[sso-session corp]\nsso_start_url = https://x/%41\n"
        assert parse_sso_sessions(text) == ["corp"]

    def test_invalid_ini(self) -> None:
        with pytest.raises(ConfigParseError, match="Invalid AWS config"):
            parse_sso_sessions("sso_region = eu-west-1\n")

    def test_duplicate_section(self) -> None:
        with pytest.raises(ConfigError):
            parse_sso_sessions("[sso-session a]\n[sso-session a]\n")


class TestAwsConfigPath:
    def test_env_var(self, isolated_config: Path) -> None:
        path = isolated_config / "aws" / "config"
        path.parent.mkdir(parents=True)
        path.write_text("")

        assert aws_config_path() == path

    def test_home_default(
        self, isolated_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("AWS_CONFIG_FILE")
        path = isolated_config / "home" / ".aws" / "config"
        path.parent.mkdir(parents=True)
        path.write_text("")

        assert aws_config_path() == path

    def test_missing(self, isolated_config: Path) -> None:
        with pytest.raises(ConfigNotFoundError, match="aws configure sso"):
            aws_config_path()


class TestLoadSsoSessions:
    def test_default_location(self, isolated_config: Path) -> None:
        path = isolated_config / "aws" / "config"
        path.parent.mkdir(parents=True)
        path.write_text("[sso-session corp]\n")

        assert load_sso_sessions() == ["corp"]

    def test_explicit_missing(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigNotFoundError):
            load_sso_sessions(tmp_path / "nope")
