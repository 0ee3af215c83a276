"""Playwright implementation of :class:`~aws_sso_login.browser.base.BrowserTab`.

Playwright works in milliseconds; this module converts the flow's
second-based timeouts and maps Playwright exceptions onto the
aws-sso-login hierarchy:

* a wait that runs out -> :class:`~aws_sso_login.exceptions.ElementTimeoutError`
* a failed page load -> :class:`~aws_sso_login.exceptions.NavigationError`
* any other failure while acting on the page ->
  :class:`~aws_sso_login.exceptions.FlowError`
"""

from __future__ import annotations

from typing import Optional

from playwright.sync_api import ElementHandle, Page
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from aws_sso_login.browser.base import BrowserTab, Element
from aws_sso_login.exceptions import ElementTimeoutError, FlowError, NavigationError


def _ms(seconds: float) -> float:
    return seconds * 1000.0


class PlaywrightElement(Element):
    """Wraps a Playwright :class:`~playwright.sync_api.ElementHandle`."""

    def __init__(self, handle: ElementHandle, selector: str) -> None:
        self._handle = handle
        self._selector = selector

    def click(self) -> None:
        try:
            self._handle.click()
        except PlaywrightError as exc:
            raise FlowError(f"Cannot click '{self._selector}': {exc.message}") from exc

    def get_text(self) -> str:
        try:
            return self._handle.inner_text().strip()
        except PlaywrightError as exc:
            raise FlowError(
                f"Cannot read text of '{self._selector}': {exc.message}"
            ) from exc

    def clear(self) -> None:
        try:
            self._handle.evaluate("el => { el.value = ''; }")
        except PlaywrightError as exc:
            raise FlowError(f"Cannot clear '{self._selector}': {exc.message}") from exc


class PlaywrightTab(BrowserTab):
    """A :class:`BrowserTab` backed by a Playwright :class:`~playwright.sync_api.Page`.

    Args:
        page: The page to drive. The tab does not own the browser context.
        navigation_timeout: Seconds to wait for a page load to settle.
    """

    def __init__(self, page: Page, navigation_timeout: float = 30.0) -> None:
        self._page = page
        self._navigation_timeout = navigation_timeout

    @property
    def page(self) -> Page:
        return self._page

    def goto(self, url: str) -> None:
        """Navigate to *url* and wait for the load event.

        Raises:
            NavigationError: If the navigation fails or times out.
        """
        try:
            self._page.goto(url, timeout=_ms(self._navigation_timeout))
        except PlaywrightError as exc:
            raise NavigationError(f"Cannot open {url}: {exc.message}") from exc

    def wait_for_navigation(self) -> None:
        try:
            self._page.wait_for_load_state(
                "load", timeout=_ms(self._navigation_timeout)
            )
        except PlaywrightTimeoutError as exc:
            raise NavigationError(
                f"Page did not finish loading within {self._navigation_timeout:g}s"
            ) from exc
        except PlaywrightError as exc:
            raise NavigationError(f"Navigation failed: {exc.message}") from exc

    def find_element(self, selector: str) -> Optional[Element]:
        try:
            handle = self._page.query_selector(selector)
        except PlaywrightError:
            # The execution context is torn down while a navigation commits.
            return None
        if handle is None:
            return None
        return PlaywrightElement(handle, selector)

    def wait_for_element(self, selector: str, timeout: float) -> Element:
        try:
            handle = self._page.wait_for_selector(
                selector, state="visible", timeout=_ms(timeout)
            )
        except PlaywrightTimeoutError as exc:
            raise ElementTimeoutError(selector, timeout) from exc
        except PlaywrightError as exc:
            raise FlowError(f"Waiting for '{selector}' failed: {exc.message}") from exc
        if handle is None:
            raise ElementTimeoutError(selector, timeout)
        return PlaywrightElement(handle, selector)

    def send_keystrokes(self, text: str) -> None:
        try:
            self._page.keyboard.type(text)
        except PlaywrightError as exc:
            raise FlowError(f"Typing failed: {exc.message}") from exc

    def press_key(self, key: str) -> None:
        try:
            self._page.keyboard.press(key)
        except PlaywrightError as exc:
            raise FlowError(f"Pressing {key} failed: {exc.message}") from exc

    def get_title(self) -> str:
        try:
            return self._page.title()
        except PlaywrightError:
            # Same navigation race as find_element: treat as "no title yet".
            return ""

    def close(self) -> None:
        if not self._page.is_closed():
            self._page.close()
