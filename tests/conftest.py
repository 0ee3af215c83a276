"""Shared test fixtures for aws-sso-login.

Provides output isolation, config isolation, a scripted fake browser tab,
and a canned-answer prompter. These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import pytest

from aws_sso_login.browser.base import BrowserTab, Element
from aws_sso_login.exceptions import ElementTimeoutError
from aws_sso_login.models import Settings, TimeoutSettings
from aws_sso_login.output import OutputManager, reset_output, set_output
from aws_sso_login.prompts import Prompter


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stderr at creation time.
    When Typer's CliRunner redirects the streams and the test finishes,
    the cached references become stale. Resetting forces a fresh manager
    to be created on next use.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a colourless, quiet OutputManager as the global output."""
    output = OutputManager(no_color=True, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points the XDG directories, ``HOME`` and ``AWS_CONFIG_FILE`` into
    tmp_path and clears the AWS_SSO_LOGIN_* variables, so tests never
    touch the real user config or browser profile.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "aws" / "config"))
    monkeypatch.setattr("aws_sso_login.config._is_xdg_platform", lambda: True)

    for var in [
        "AWS_SSO_LOGIN_PROFILE",
        "AWS_SSO_LOGIN_PROVIDER",
        "AWS_SSO_LOGIN_BROWSER_DIR",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def settings() -> Settings:
    """Settings tuned for tests: no polling pause, no wall-clock deadline,
    and a low iteration cap so a broken router fails fast instead of hanging."""
    return Settings(
        max_iterations=50,
        timeouts=TimeoutSettings(element=5, approval=60, flow=None, poll_interval=0),
    )


# ---------------------------------------------------------------------------
# Scripted browser tab
# ---------------------------------------------------------------------------


class FakePage:
    """One scripted screen.

    Args:
        title: Page title.
        elements: Selector -> inner text of the elements on the page.
        next_on: ``(event, value)`` that triggers navigation to the next
            page on the following ``wait_for_navigation``, e.g.
            ``("key", "Enter")`` or ``("click", selector)``.
        dwell: Number of ``wait_for_navigation`` calls the page survives
            before the tab moves on by itself.
        auto_advance: Move on to the next page when an awaited element is
            missing here (an asynchronous navigation, e.g. MFA approval).
    """

    def __init__(
        self,
        title: str = "",
        elements: Optional[dict[str, str]] = None,
        next_on: Optional[tuple[str, str]] = None,
        dwell: Optional[int] = None,
        auto_advance: bool = False,
    ) -> None:
        self.title = title
        self.elements = elements or {}
        self.next_on = next_on
        self.dwell = dwell
        self.auto_advance = auto_advance


class FakeElement(Element):
    def __init__(self, tab: "FakeTab", selector: str, text: str) -> None:
        self._tab = tab
        self.selector = selector
        self.text = text

    def click(self) -> None:
        self._tab.record("click", self.selector)

    def get_text(self) -> str:
        return self.text

    def clear(self) -> None:
        self._tab.record("clear", self.selector)


class FakeTab(BrowserTab):
    """A :class:`BrowserTab` that walks through a list of :class:`FakePage`.

    Every action is appended to :attr:`events`; every element wait to
    :attr:`element_waits` as ``(selector, timeout)``.
    """

    def __init__(self, pages: list[FakePage]) -> None:
        self.pages = pages
        self.index = 0
        self.events: list[tuple[str, str]] = []
        self.element_waits: list[tuple[str, float]] = []
        self.navigation_waits = 0
        self.closed = False
        self._pending = False
        self._seen = 0

    @property
    def page(self) -> FakePage:
        return self.pages[self.index]

    def record(self, event: str, value: str) -> None:
        self.events.append((event, value))
        if self.page.next_on == (event, value):
            self._pending = True

    def _advance(self) -> None:
        if self.index < len(self.pages) - 1:
            self.index += 1
        self._pending = False
        self._seen = 0

    def wait_for_navigation(self) -> None:
        self.navigation_waits += 1
        if self._pending:
            self._advance()
            return
        if self.page.dwell is not None:
            if self._seen >= self.page.dwell:
                self._advance()
            else:
                self._seen += 1

    def find_element(self, selector: str) -> Optional[Element]:
        if selector in self.page.elements:
            return FakeElement(self, selector, self.page.elements[selector])
        return None

    def wait_for_element(self, selector: str, timeout: float) -> Element:
        self.element_waits.append((selector, timeout))
        while (
            selector not in self.page.elements
            and self.page.auto_advance
            and self.index < len(self.pages) - 1
        ):
            self._advance()
        element = self.find_element(selector)
        if element is None:
            raise ElementTimeoutError(selector, timeout)
        return element

    def send_keystrokes(self, text: str) -> None:
        self.record("type", text)

    def press_key(self, key: str) -> None:
        self.record("key", key)

    def get_title(self) -> str:
        return self.page.title

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_page():
    """The :class:`FakePage` class, for building page scripts."""
    return FakePage


@pytest.fixture
def fake_tab():
    """The :class:`FakeTab` class; call it with a list of pages."""
    return FakeTab


# ---------------------------------------------------------------------------
# Prompter
# ---------------------------------------------------------------------------


class StubPrompter(Prompter):
    """Prompter returning canned answers and recording what was asked."""

    def __init__(
        self,
        email: str = "jane@example.com",
        password: str = "hunter2",
        choice: Optional[str] = None,
    ) -> None:
        self._email = email
        self._password = password
        self._choice = choice
        self.asked: list[str] = []

    def email(self) -> str:
        self.asked.append("email")
        return self._email

    def password(self) -> str:
        self.asked.append("password")
        return self._password

    def select_profile(self, profiles: list[str]) -> str:
        self.asked.append("select")
        return self._choice if self._choice is not None else profiles[0]

    def pause(self, message: str) -> None:
        self.asked.append("pause")


@pytest.fixture
def prompter() -> StubPrompter:
    return StubPrompter()


@pytest.fixture
def stub_prompter():
    """The :class:`StubPrompter` class, for tests needing custom answers."""
    return StubPrompter
