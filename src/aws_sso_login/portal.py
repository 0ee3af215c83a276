"""Screens of the AWS device-authorization portal.

The verification URL printed by ``aws sso login`` first shows a
"confirm this code" page, then hands off to the identity provider, and
finally comes back to the portal (page title ``AWS access portal``) where
the CLI's access request must be allowed.

:class:`AwsPortal` handles the two portal-side steps; the provider pages
in between belong to the :mod:`~aws_sso_login.providers` strategy.
"""

from __future__ import annotations

import logging

from aws_sso_login.browser.base import BrowserTab
from aws_sso_login.models import PageKind, PortalSelectors

logger = logging.getLogger(__name__)


class AwsPortal:
    """AWS portal steps before and after the identity-provider login.

    Args:
        selectors: CSS selectors and the terminal page title.
        element_timeout: Seconds to wait for each portal element.
    """

    def __init__(self, selectors: PortalSelectors, element_timeout: float) -> None:
        self._selectors = selectors
        self._timeout = element_timeout

    @property
    def terminal_title(self) -> str:
        """Title of the portal page shown once the provider login is done."""
        return self._selectors.terminal_title

    def confirm(self, tab: BrowserTab) -> None:
        """Click the verification confirmation button on the first screen."""
        logger.debug("Handling %s", PageKind.VERIFICATION_PROMPT.value)
        tab.wait_for_element(self._selectors.verification_button, self._timeout).click()

    def complete(self, tab: BrowserTab) -> str:
        """Allow the CLI's access request and return the confirmation text.

        Raises:
            ElementTimeoutError: If the allow button or the confirmation
                header never appears.
        """
        logger.debug("Waiting and clicking on allow access")
        tab.wait_for_element(self._selectors.allow_button, self._timeout).click()

        logger.debug("Waiting on confirmation")
        header = tab.wait_for_element(self._selectors.status_header, self._timeout)
        return header.get_text()
