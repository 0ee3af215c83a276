"""Abstract browser automation surface used by the login flow.

The router, the provider handlers and the AWS portal steps only talk to a
:class:`BrowserTab` and the :class:`Element` handles it returns. The
production implementation wraps a Playwright page
(:class:`~aws_sso_login.browser.playwright_tab.PlaywrightTab`); tests drive
the same code with a scripted fake.

All operations are blocking. A tab is owned by a single caller and never
used concurrently.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class Element(ABC):
    """Handle to a single DOM element on the tab."""

    @abstractmethod
    def click(self) -> None:
        """Click the element."""
        ...

    @abstractmethod
    def get_text(self) -> str:
        """Return the element's rendered inner text."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Reset the element's ``value`` to an empty string (form inputs)."""
        ...


class BrowserTab(ABC):
    """A single browser page driven by the login flow.

    Implementations must keep :meth:`find_element` and :meth:`get_title`
    free of side effects: the router classifies a page by calling them and
    may classify the same page several times.
    """

    @abstractmethod
    def wait_for_navigation(self) -> None:
        """Block until any in-flight navigation has finished loading.

        Raises:
            NavigationError: If the page fails to load.
        """
        ...

    @abstractmethod
    def find_element(self, selector: str) -> Optional[Element]:
        """Return the first element matching *selector*, or ``None``. Never waits."""
        ...

    @abstractmethod
    def wait_for_element(self, selector: str, timeout: float) -> Element:
        """Wait up to *timeout* seconds for *selector* to appear.

        Raises:
            ElementTimeoutError: If the element does not appear in time.
        """
        ...

    @abstractmethod
    def send_keystrokes(self, text: str) -> None:
        """Type *text* into the focused element one key at a time."""
        ...

    @abstractmethod
    def press_key(self, key: str) -> None:
        """Press a named key such as ``"Enter"``."""
        ...

    @abstractmethod
    def get_title(self) -> str:
        """Return the page ``<title>``."""
        ...

    def close(self) -> None:
        """Close the tab. The default implementation does nothing."""
