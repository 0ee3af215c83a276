"""Abstract base class for identity-provider strategies.

An identity provider knows how to recognise its own login screens and
what to do on each of them. The :class:`~aws_sso_login.router.PageRouter`
owns the loop and the flow state; a provider only supplies:

1. :meth:`IdentityProvider.classify` -- probe the tab and return a
   :class:`~aws_sso_login.models.PageKind`.
2. :attr:`IdentityProvider.handlers` -- a dispatch table from
   :class:`~aws_sso_login.models.PageKind` to a handler callable.

To add a provider, subclass :class:`IdentityProvider` and register it with
the :class:`~aws_sso_login.providers.registry.ProviderRegistry`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from aws_sso_login.browser.base import BrowserTab
from aws_sso_login.models import PageKind, TimeoutSettings
from aws_sso_login.prompts import Prompter

Handler = Callable[[BrowserTab], None]


class IdentityProvider(ABC):
    """Base class for identity-provider login strategies.

    Args:
        prompter: Source of the email address and password.
        timeouts: Element and approval timeouts for the handlers.
    """

    def __init__(self, prompter: Prompter, timeouts: TimeoutSettings) -> None:
        self.prompter = prompter
        self.timeouts = timeouts

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique provider name used in settings and on the CLI."""
        ...

    @abstractmethod
    def classify(self, tab: BrowserTab) -> PageKind:
        """Identify the provider screen currently shown.

        Must only probe the page; calling it twice on an unchanged page
        returns the same kind.
        """
        ...

    @property
    @abstractmethod
    def handlers(self) -> dict[PageKind, Handler]:
        """Map each page kind this provider handles to its handler."""
        ...
