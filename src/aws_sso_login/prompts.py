"""Interactive prompts for credentials and sso-session selection.

Everything the user types goes through :class:`Prompter`, so the browser
flow can be exercised in tests with a stub that returns canned answers.
Prompts read from the terminal with :func:`typer.prompt`; a closed stdin or
Ctrl-D surfaces as :class:`~aws_sso_login.exceptions.UserInputError`.
"""

from __future__ import annotations

import click
import typer

from aws_sso_login.exceptions import UserInputError
from aws_sso_login.output import info


class Prompter:
    """Terminal-backed prompt provider used by the provider handlers."""

    def email(self) -> str:
        """Ask for the sign-in email address."""
        return self._ask("Email")

    def password(self) -> str:
        """Ask for the password without echoing it."""
        return self._ask("Password", hide_input=True)

    def select_profile(self, profiles: list[str]) -> str:
        """Present a numbered list of sso-sessions and return the chosen one.

        Args:
            profiles: Session names in display order. Must not be empty.

        Raises:
            UserInputError: If the answer is not a number in range, or input
                is closed.
        """
        info("Available SSO sessions:")
        for i, name in enumerate(profiles, 1):
            info(f"  {i}. {name}")

        choice = self._ask("SSO", default="1")
        try:
            idx = int(choice) - 1
        except ValueError:
            raise UserInputError(f"Invalid selection: {choice!r}") from None
        if idx < 0 or idx >= len(profiles):
            raise UserInputError(f"Selection must be between 1 and {len(profiles)}.")
        return profiles[idx]

    def pause(self, message: str) -> None:
        """Block until the user presses Enter."""
        self._ask(message, default="", show_default=False)

    def _ask(self, text: str, **kwargs: object) -> str:
        try:
            return typer.prompt(text, **kwargs)
        except click.exceptions.Abort:
            raise UserInputError(f"No input received for '{text}'") from None
