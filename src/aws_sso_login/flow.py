"""Browser half of the login: open the verification URL and finish the flow.

:func:`browser_login` is what the launcher calls once it has a
verification URL. It scopes a :class:`~aws_sso_login.browser.BrowserSession`
around :func:`drive_tab`, which performs the portal confirmation, runs the
page router over the provider's screens, and prints the final status.
"""

from __future__ import annotations

import logging
from typing import Optional

from aws_sso_login.browser.base import BrowserTab
from aws_sso_login.browser.session import BrowserSession
from aws_sso_login.models import Settings
from aws_sso_login.output import print_data
from aws_sso_login.portal import AwsPortal
from aws_sso_login.prompts import Prompter
from aws_sso_login.providers.registry import ProviderRegistry, create_default_registry
from aws_sso_login.router import PageRouter

logger = logging.getLogger(__name__)


def drive_tab(
    tab: BrowserTab,
    settings: Settings,
    prompter: Prompter,
    registry: Optional[ProviderRegistry] = None,
) -> str:
    """Run the login on a tab already showing the verification page.

    Args:
        tab: The tab navigated to the verification URL.
        settings: Resolved settings (provider name, timeouts, selectors).
        prompter: Source of credentials for the provider handlers.
        registry: Provider registry; defaults to the built-in providers.

    Returns:
        The status text shown by the portal once access is allowed.

    Raises:
        ProviderError: If ``settings.provider`` is not registered.
        ElementTimeoutError: If an expected element never appears.
        FlowTimeoutError: If the router's budget runs out.
    """
    if registry is None:
        registry = create_default_registry()
    provider = registry.create(settings.provider, prompter, settings.timeouts)
    portal = AwsPortal(settings.portal, settings.timeouts.element)

    portal.confirm(tab)
    status = PageRouter(provider, portal, settings).run(tab)
    print_data(f"Status: {status}")
    return status


def browser_login(
    url: str,
    gui: bool,
    settings: Settings,
    prompter: Prompter,
) -> str:
    """Open *url* in a fresh browser session and drive the login to completion.

    The browser is closed on return and on any error. With
    ``browser.keep_open`` and a visible browser, the user is asked to press
    Enter before it closes.
    """
    with BrowserSession(settings, gui=gui) as session:
        tab = session.open(url)
        status = drive_tab(tab, settings, prompter)
        if gui and settings.browser.keep_open:
            prompter.pause("Press Enter to close the browser")
        return status
