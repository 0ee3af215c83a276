"""Browser session manager: persistent Chromium plus the single login tab.

:class:`BrowserSession` is a context manager. Entering it starts
Playwright and launches Chromium on the persistent profile directory;
leaving it closes the context and stops Playwright on every exit path,
including errors and Ctrl-C, so no orphaned browser keeps the profile
directory locked.

Example::

    with BrowserSession(settings, gui=False) as session:
        tab = session.open(url)
        ...
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Optional

from playwright.sync_api import BrowserContext, Playwright, sync_playwright
from playwright.sync_api import Error as PlaywrightError

from aws_sso_login.browser.playwright_tab import PlaywrightTab
from aws_sso_login.config import get_browser_data_dir
from aws_sso_login.exceptions import BrowserLaunchError
from aws_sso_login.models import Settings

logger = logging.getLogger(__name__)

# Room for the window frame and tab strip around the page viewport.
_FRAME_WIDTH = 15
_FRAME_HEIGHT = 35


class BrowserSession:
    """Owns a persistent Chromium context and at most one tab.

    Args:
        settings: Resolved settings (browser options and timeouts).
        gui: Show the browser window instead of running headless.
    """

    def __init__(self, settings: Settings, gui: bool = False) -> None:
        self._settings = settings
        self._gui = gui
        self._playwright: Optional[Playwright] = None
        self._context: Optional[BrowserContext] = None
        self._tab: Optional[PlaywrightTab] = None

    def __enter__(self) -> BrowserSession:
        self.start()
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.stop()

    def start(self) -> None:
        """Start Playwright and launch Chromium on the persistent profile.

        Raises:
            BrowserLaunchError: If Playwright or Chromium cannot be started.
        """
        browser = self._settings.browser
        user_data_dir = get_browser_data_dir(self._settings)
        logger.debug("Launching browser with profile %s", user_data_dir)

        try:
            self._playwright = sync_playwright().start()
            self._context = self._playwright.chromium.launch_persistent_context(
                str(user_data_dir),
                headless=not self._gui,
                channel=browser.channel,
                chromium_sandbox=False,
                args=[
                    "--no-sandbox",
                    f"--window-size={browser.width},{browser.height}",
                ],
                viewport={
                    "width": browser.width - _FRAME_WIDTH,
                    "height": browser.height - _FRAME_HEIGHT,
                },
            )
        except PlaywrightError as exc:
            self.stop()
            raise BrowserLaunchError(f"Cannot launch browser: {exc.message}") from exc

    def open(self, url: str) -> PlaywrightTab:
        """Open the login tab on *url*.

        The persistent context starts with one blank page, which is reused;
        a second call is rejected since the flow owns exactly one tab.

        Raises:
            BrowserLaunchError: If the session has not been started or a tab
                is already open.
            NavigationError: If the URL cannot be loaded.
        """
        if self._context is None:
            raise BrowserLaunchError("Browser session is not started")
        if self._tab is not None:
            raise BrowserLaunchError("Browser session already has an open tab")

        try:
            pages = self._context.pages
            page = pages[0] if pages else self._context.new_page()
        except PlaywrightError as exc:
            raise BrowserLaunchError(f"Cannot open a browser tab: {exc.message}") from exc

        self._tab = PlaywrightTab(page, self._settings.timeouts.navigation)
        logger.debug("Url: %s", url)
        self._tab.goto(url)
        return self._tab

    def stop(self) -> None:
        """Close the tab and the context, then stop Playwright.

        Safe to call repeatedly.
        """
        tab, self._tab = self._tab, None
        context, self._context = self._context, None
        playwright, self._playwright = self._playwright, None
        try:
            for resource in (tab, context):
                if resource is None:
                    continue
                try:
                    resource.close()
                except PlaywrightError as exc:
                    logger.debug("Ignoring error while closing browser: %s", exc.message)
        finally:
            if playwright is not None:
                playwright.stop()
