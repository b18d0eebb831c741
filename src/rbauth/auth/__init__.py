"""Authentication and authorization for rbauth.

The main entry points are:

- :class:`AuthProvider` -- abstract host contract (``login``, ``logout``,
  ``check_auth``, ``get_identity``, ``get_tenant_identity``, ``can``).
- :class:`SimpleAuthProvider` -- HTTP-backed implementation.
- :func:`create_auth_provider` -- factory with on-disk "remember me" storage.
- :class:`TokenCache` -- two-tier token storage with persistent-first reads.
- :class:`AuthorizationGate` and :class:`IdentityResolver` -- the
  non-network operations of a provider.

Typical usage::

    from rbauth.auth import create_auth_provider

    provider = create_auth_provider("https://api.example.com/auth/login")
    result = await provider.check_auth()
"""

from rbauth.auth.base import AuthProvider
from rbauth.auth.cache import TokenCache, TokenStore
from rbauth.auth.gate import AuthorizationGate
from rbauth.auth.identity import IdentityResolver
from rbauth.auth.provider import SimpleAuthProvider, create_auth_provider
from rbauth.auth.storage import DiskStorage, MemoryStorage, StorageTier

__all__ = [
    "AuthProvider",
    "AuthorizationGate",
    "DiskStorage",
    "IdentityResolver",
    "MemoryStorage",
    "SimpleAuthProvider",
    "StorageTier",
    "TokenCache",
    "TokenStore",
    "create_auth_provider",
]
