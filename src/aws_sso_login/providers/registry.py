"""Provider registry -- maps provider names to identity-provider strategies.

The :class:`ProviderRegistry` holds provider *classes* keyed by name and
builds an instance bound to the run's prompter and timeouts on lookup.
Call :func:`create_default_registry` for a registry pre-loaded with every
built-in provider.
"""

from __future__ import annotations

from aws_sso_login.exceptions import ProviderError
from aws_sso_login.models import TimeoutSettings
from aws_sso_login.prompts import Prompter
from aws_sso_login.providers.base import IdentityProvider


class ProviderRegistry:
    """Registry and factory for identity-provider strategies.

    Example::

        registry = ProviderRegistry()
        registry.register("microsoft", MicrosoftProvider)
        provider = registry.create("microsoft", Prompter(), TimeoutSettings())
    """

    def __init__(self) -> None:
        self._providers: dict[str, type[IdentityProvider]] = {}

    def register(self, name: str, provider_cls: type[IdentityProvider]) -> None:
        """Register *provider_cls* under *name*, replacing any previous entry."""
        self._providers[name] = provider_cls

    def create(
        self, name: str, prompter: Prompter, timeouts: TimeoutSettings
    ) -> IdentityProvider:
        """Instantiate the provider registered under *name*.

        Raises:
            ProviderError: If no provider is registered for *name*.
        """
        provider_cls = self._providers.get(name)
        if provider_cls is None:
            available = ", ".join(self.list_names()) or "(none)"
            raise ProviderError(
                f"No identity provider registered for '{name}'. "
                f"Available providers: {available}"
            )
        return provider_cls(prompter, timeouts)

    def list_names(self) -> list[str]:
        """Return the registered provider names, sorted."""
        return sorted(self._providers)


def create_default_registry() -> ProviderRegistry:
    """Create a :class:`ProviderRegistry` with the built-in providers.

    - ``microsoft`` -- Microsoft Entra ID converged login.
    """
    from aws_sso_login.providers.microsoft import MicrosoftProvider

    registry = ProviderRegistry()
    registry.register("microsoft", MicrosoftProvider)
    return registry
