"""Identity-provider strategies for the page router.

- :class:`IdentityProvider` -- abstract base: ``classify`` plus a handler
  dispatch table.
- :class:`ProviderRegistry` / :func:`create_default_registry` -- name-based
  lookup of provider implementations.
- :class:`MicrosoftProvider` -- Microsoft Entra ID.
"""

from aws_sso_login.providers.base import Handler, IdentityProvider
from aws_sso_login.providers.microsoft import MicrosoftProvider
from aws_sso_login.providers.registry import ProviderRegistry, create_default_registry

__all__ = [
    "Handler",
    "IdentityProvider",
    "MicrosoftProvider",
    "ProviderRegistry",
    "create_default_registry",
]
