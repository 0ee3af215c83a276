"""Models shared across aws-sso-login modules.

**Settings models** -- serialised as JSON in the user's config directory and
validated with Pydantic v2:
    :class:`TimeoutSettings`, :class:`BrowserSettings`,
    :class:`PortalSelectors`, and the top-level :class:`Settings`.

**Flow state** -- transient values owned by the page router:
    :class:`PageKind` (what screen the tab is showing) and
    :class:`FlowProgress` (whether the MFA request has been approved).

Every settings field has a default, so an empty ``config.json`` (or none at
all) yields a working configuration.
"""

from __future__ import annotations

import enum
from typing import Optional

from pydantic import BaseModel, Field


# --- Settings ---


class TimeoutSettings(BaseModel):
    """Timeouts for browser waits and the overall login flow, in seconds."""

    element: float = Field(
        default=20.0, gt=0, description="Default wait for a page element"
    )
    approval: float = Field(
        default=180.0,
        gt=0,
        description="Wait for elements gated on out-of-band MFA approval",
    )
    navigation: float = Field(
        default=30.0, gt=0, description="Wait for a page load to settle"
    )
    flow: Optional[float] = Field(
        default=600.0,
        gt=0,
        description="Deadline for the whole page-router loop (null disables)",
    )
    poll_interval: float = Field(
        default=0.5,
        ge=0,
        description="Pause after an unrecognised page before probing again",
    )


class BrowserSettings(BaseModel):
    """Chromium launch options.

    The window is deliberately small: it only has to fit the provider's
    login card when ``--gui`` is used.
    """

    user_data_dir: Optional[str] = Field(
        default=None,
        description="Persistent profile directory (default ~/.aws-sso-login)",
    )
    width: int = Field(default=425, gt=100)
    height: int = Field(default=550, gt=100)
    channel: Optional[str] = Field(
        default=None,
        description="Playwright browser channel, e.g. 'chrome' or 'msedge'",
    )
    keep_open: bool = Field(
        default=False,
        description="With --gui, wait for Enter before closing the browser",
    )


class PortalSelectors(BaseModel):
    """Selectors for the AWS device-authorization portal.

    The portal's class names are build hashes that change between AWS UI
    releases, so they are overridable from ``config.json``.
    """

    verification_button: str = "#cli_verification_btn"
    allow_button: str = (
        "button.awsui_button_vjswe_1dg71_153.awsui_variant-primary_vjswe_1dg71_296"
    )
    status_header: str = "div.awsui_header_mx3cw_4ej0u_321.awsui_header_17427_1ns0c_5"
    terminal_title: str = "AWS access portal"


class Settings(BaseModel):
    """Top-level settings stored at ``<config_dir>/config.json``.

    Example::

        {
          "provider": "microsoft",
          "timeouts": {"approval": 300},
          "browser": {"channel": "chrome"}
        }
    """

    provider: str = Field(
        default="microsoft", description="Identity provider strategy name"
    )
    aws_command: list[str] = Field(
        default_factory=lambda: ["aws"],
        min_length=1,
        description="Command prefix used to invoke the AWS CLI",
    )
    max_iterations: Optional[int] = Field(
        default=500,
        gt=0,
        description="Cap on page-router iterations (null disables)",
    )
    timeouts: TimeoutSettings = Field(default_factory=TimeoutSettings)
    browser: BrowserSettings = Field(default_factory=BrowserSettings)
    portal: PortalSelectors = Field(default_factory=PortalSelectors)


# --- Flow state ---


class PageKind(enum.Enum):
    """Classification of the screen currently displayed in the tab."""

    VERIFICATION_PROMPT = "verification_prompt"
    SIGN_IN = "sign_in"
    PASSWORD_ENTRY = "password_entry"
    MFA_APPROVAL = "mfa_approval"
    REMEMBER_DEVICE = "remember_device"
    ACCESS_GRANTED = "access_granted"
    UNKNOWN = "unknown"


class FlowProgress:
    """Progress carried across router iterations.

    ``approved`` is read-only and only ever moves from ``False`` to ``True``
    through :meth:`approve`.
    """

    def __init__(self) -> None:
        self._approved = False

    def __repr__(self) -> str:
        return f"FlowProgress(approved={self._approved})"

    @property
    def approved(self) -> bool:
        return self._approved

    def approve(self) -> None:
        self._approved = True
