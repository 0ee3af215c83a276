"""Page router -- the state machine that walks the provider's login pages.

The router never stores which screen it is on. Every iteration it waits for
navigation to settle, re-classifies the tab, and runs the matching handler:

1. MFA already approved and the terminal title showing -> allow access
   on the portal and return its status text.
2. MFA approval screen -> show the code, handle "stay signed in", mark the
   flow approved, keep looping until the terminal title shows up.
3. A screen the provider has a handler for -> run it.
4. Anything else -> log, pause briefly, try again.

Handler failures (typically
:class:`~aws_sso_login.exceptions.ElementTimeoutError`) propagate and abort
the attempt. Because an unrecognised page is otherwise retried forever,
the loop is bounded by ``Settings.max_iterations`` and the
``timeouts.flow`` deadline, either of which raises
:class:`~aws_sso_login.exceptions.FlowTimeoutError`.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from aws_sso_login.browser.base import BrowserTab
from aws_sso_login.exceptions import FlowTimeoutError
from aws_sso_login.models import FlowProgress, PageKind, Settings
from aws_sso_login.portal import AwsPortal
from aws_sso_login.providers.base import IdentityProvider

logger = logging.getLogger(__name__)


class PageRouter:
    """Drive one tab from the provider sign-in to the AWS portal.

    Args:
        provider: Identity-provider strategy (classification + handlers).
        portal: AWS portal steps, including the terminal page title.
        settings: Supplies the iteration cap, flow deadline and poll interval.
        clock: Monotonic clock, injectable for tests.
        sleep: Sleep function, injectable for tests.
    """

    def __init__(
        self,
        provider: IdentityProvider,
        portal: AwsPortal,
        settings: Settings,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._provider = provider
        self._portal = portal
        self._max_iterations = settings.max_iterations
        self._flow_timeout = settings.timeouts.flow
        self._poll_interval = settings.timeouts.poll_interval
        self._clock = clock
        self._sleep = sleep
        self.progress = FlowProgress()

    def classify(self, tab: BrowserTab) -> PageKind:
        """Classify the page currently shown in *tab*.

        The portal's terminal title only counts once the MFA request has
        been approved; until then the page is left to the provider, so its
        sign-in markers are still handled.
        """
        if self.progress.approved and tab.get_title() == self._portal.terminal_title:
            return PageKind.ACCESS_GRANTED
        return self._provider.classify(tab)

    def run(self, tab: BrowserTab) -> str:
        """Loop until access is granted and return the portal's status text.

        Raises:
            ElementTimeoutError: If a handler's element never appears.
            FlowTimeoutError: If the iteration cap or flow deadline is hit.
        """
        handlers = self._provider.handlers
        deadline: Optional[float] = None
        if self._flow_timeout is not None:
            deadline = self._clock() + self._flow_timeout
        iterations = 0

        while True:
            if self._max_iterations is not None and iterations >= self._max_iterations:
                raise FlowTimeoutError(
                    f"Login did not complete after {iterations} page checks"
                )
            if deadline is not None and self._clock() >= deadline:
                raise FlowTimeoutError(
                    f"Login did not complete within {self._flow_timeout:g}s"
                )
            iterations += 1

            tab.wait_for_navigation()
            kind = self.classify(tab)

            if kind is PageKind.ACCESS_GRANTED:
                logger.debug("Access granted")
                return self._portal.complete(tab)

            if kind is PageKind.MFA_APPROVAL:
                handlers[PageKind.MFA_APPROVAL](tab)
                handlers[PageKind.REMEMBER_DEVICE](tab)
                self.progress.approve()
                continue

            handler = handlers.get(kind)
            if handler is not None:
                logger.debug("Handling %s", kind.value)
                handler(tab)
                continue

            logger.debug("Waiting on %s page", kind.value)
            if self._poll_interval:
                self._sleep(self._poll_interval)
