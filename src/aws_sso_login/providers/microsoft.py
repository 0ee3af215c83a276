"""Microsoft Entra ID (login.microsoftonline.com) login pages.

The Entra sign-in card is a single-page app; its screens are told apart by
the header element and, for the Authenticator push, by the approval title.
The selectors below match the classic "converged" login UI.
"""

from __future__ import annotations

import logging

from aws_sso_login.browser.base import BrowserTab
from aws_sso_login.models import PageKind
from aws_sso_login.output import print_data, progress
from aws_sso_login.providers.base import Handler, IdentityProvider

logger = logging.getLogger(__name__)

MFA_TITLE = "div#idDiv_SAOTCAS_Title.row.text-title"
LOGIN_HEADER = "div#loginHeader.row.title.ext-title"
EMAIL_INPUT = "input#i0116.form-control.ltr_override.input.ext-input.text-box.ext-text-box"
PASSWORD_INPUT = "input#i0118.form-control.input.ext-input.text-box.ext-text-box"
MFA_CODE = "div#idRichContext_DisplaySign.displaySign.display-sign-height"
REMEMBER_CHECKBOX = "input#KmsiCheckboxField"
CONFIRM_BUTTON = (
    "input#idSIButton9.win-button.button_primary.button.ext-button.primary.ext-primary"
)

APPROVAL_PROMPT = "Approve sign in request"
HEADER_KINDS = {
    "Sign in": PageKind.SIGN_IN,
    "Enter password": PageKind.PASSWORD_ENTRY,
}


class MicrosoftProvider(IdentityProvider):
    """Drives the Entra ID email, password and Authenticator push screens."""

    @property
    def name(self) -> str:
        return "microsoft"

    def classify(self, tab: BrowserTab) -> PageKind:
        mfa_title = tab.find_element(MFA_TITLE)
        if mfa_title is not None:
            if mfa_title.get_text() == APPROVAL_PROMPT:
                return PageKind.MFA_APPROVAL
            return PageKind.UNKNOWN

        header = tab.find_element(LOGIN_HEADER)
        if header is not None:
            page_type = header.get_text()
            kind = HEADER_KINDS.get(page_type)
            if kind is None:
                logger.debug("Unknown: %s", page_type)
                return PageKind.UNKNOWN
            return kind

        return PageKind.UNKNOWN

    @property
    def handlers(self) -> dict[PageKind, Handler]:
        return {
            PageKind.SIGN_IN: self.email,
            PageKind.PASSWORD_ENTRY: self.password,
            PageKind.MFA_APPROVAL: self.mfa,
            PageKind.REMEMBER_DEVICE: self.remember,
        }

    def email(self, tab: BrowserTab) -> None:
        logger.debug("Waiting and clicking on email input")
        field = tab.wait_for_element(EMAIL_INPUT, self.timeouts.element)
        field.click()
        field.clear()

        email = self.prompter.email()

        logger.debug("Entering email")
        tab.send_keystrokes(email)
        tab.press_key("Enter")

    def password(self, tab: BrowserTab) -> None:
        logger.debug("Waiting and clicking on password input")
        field = tab.wait_for_element(PASSWORD_INPUT, self.timeouts.element)
        field.click()
        field.clear()

        password = self.prompter.password()

        logger.debug("Entering password")
        tab.send_keystrokes(password)
        tab.press_key("Enter")

    def mfa(self, tab: BrowserTab) -> None:
        """Show the number to match in the Authenticator app.

        Approval happens on the user's phone, so there is nothing to type
        here; the long timeout covers a slow approver.
        """
        logger.debug("Waiting for MFA code")
        code = tab.wait_for_element(MFA_CODE, self.timeouts.approval).get_text()
        print_data(f"MFA: {code}")
        progress("Waiting for approval in the Authenticator app...")

    def remember(self, tab: BrowserTab) -> None:
        """Tick "Don't ask again" on the "Stay signed in?" screen and confirm."""
        logger.debug("Waiting and clicking on don't ask again")
        tab.wait_for_element(REMEMBER_CHECKBOX, self.timeouts.approval).click()

        logger.debug("Waiting and clicking on confirmation")
        tab.wait_for_element(CONFIRM_BUTTON, self.timeouts.element).click()
