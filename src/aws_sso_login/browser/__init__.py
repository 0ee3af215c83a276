"""Browser automation layer.

- :class:`BrowserTab` / :class:`Element` -- the primitives the login flow
  depends on (navigation wait, element probe and wait, click, typing).
- :class:`PlaywrightTab` -- Playwright-backed implementation.
- :class:`BrowserSession` -- launches the persistent Chromium context and
  guarantees it is closed.
"""

from aws_sso_login.browser.base import BrowserTab, Element
from aws_sso_login.browser.playwright_tab import PlaywrightElement, PlaywrightTab
from aws_sso_login.browser.session import BrowserSession

__all__ = [
    "BrowserSession",
    "BrowserTab",
    "Element",
    "PlaywrightElement",
    "PlaywrightTab",
]
