"""HTTP-backed authentication provider.

:class:`SimpleAuthProvider` implements the :class:`~rbauth.auth.base.AuthProvider`
contract on top of three collaborators:

- a :class:`~rbauth.client.executor.RequestExecutor` that POSTs to the
  auth endpoints with retry,
- a :class:`~rbauth.auth.cache.TokenStore` that keeps the session token
  between calls,
- an :class:`~rbauth.auth.gate.AuthorizationGate` and an
  :class:`~rbauth.auth.identity.IdentityResolver` for the non-network
  operations.

Login and session restore share one pipeline.  Login sends the credentials
as a JSON body to ``auth_url``; session restore sends the cached token as
``Authorization: Bearer <token>`` to ``check_url``.  Both store the token
returned by the server and hand back the user record.

Typical usage::

    from rbauth import create_auth_provider

    provider = create_auth_provider("https://api.example.com/auth/login")
    result = await provider.login({"email": "a@b.com", "password": "pw"}, keep_logged=True)
    user = result.data
    ...
    result = await provider.check_auth()   # later, after a restart
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional

from rbauth.auth.base import AuthProvider
from rbauth.auth.cache import TokenCache, TokenStore
from rbauth.auth.gate import AuthorizationGate
from rbauth.auth.identity import IdentityResolver
from rbauth.auth.storage import DiskStorage, MemoryStorage, StorageTier
from rbauth.client.executor import RequestExecutor
from rbauth.client.transport import Transport
from rbauth.exceptions import UnauthorizedError
from rbauth.models import AuthResult, ProviderConfig, RequestOptions

logger = logging.getLogger(__name__)

_KEEP_LOGGED_KEYS = ("keep_logged", "keepLogged")


class SimpleAuthProvider(AuthProvider):
    """Authentication provider talking JSON over HTTP to a login endpoint.

    Args:
        config: Endpoints, extractors, policy and resilience settings.
        transport: HTTP collaborator for the request executor.
        token_cache: Complete storage override.  When given,
            *persistent* and *ephemeral* are ignored.
        persistent: Tier for ``keep_logged`` tokens.  ``None`` drops them.
        ephemeral: Tier for session-only tokens.  Defaults to a fresh
            :class:`~rbauth.auth.storage.MemoryStorage`.
    """

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[Transport] = None,
        token_cache: Optional[TokenStore] = None,
        persistent: Optional[StorageTier] = None,
        ephemeral: Optional[StorageTier] = None,
    ) -> None:
        self._config = config
        self._executor = RequestExecutor(transport, timeout=config.timeout)
        self._token_cache: TokenStore = token_cache or TokenCache(
            persistent=persistent,
            ephemeral=ephemeral if ephemeral is not None else MemoryStorage(),
        )
        self._gate = AuthorizationGate(config.acl)
        self._identity = IdentityResolver(config.user_identifier, config.tenant_identifier)

    @property
    def config(self) -> ProviderConfig:
        """The provider's immutable configuration."""
        return self._config

    @property
    def token_cache(self) -> TokenStore:
        return self._token_cache

    def close(self) -> None:
        """Release storage tiers that hold resources (e.g. :class:`DiskStorage`)."""
        for name in ("persistent", "ephemeral"):
            tier = getattr(self._token_cache, name, None)
            close = getattr(tier, "close", None)
            if callable(close):
                close()

    async def __aenter__(self) -> "SimpleAuthProvider":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Host contract
    # ------------------------------------------------------------------ #

    async def login(
        self, credentials: Mapping[str, Any], keep_logged: bool = False
    ) -> AuthResult:
        """Authenticate *credentials* against ``auth_url``.

        A ``keep_logged`` (or ``keepLogged``) entry inside *credentials*
        is honoured as well and is not sent to the server.
        """
        payload = dict(credentials or {})
        for key in _KEEP_LOGGED_KEYS:
            if key in payload:
                keep_logged = bool(payload.pop(key)) or keep_logged
        return await self._perform_auth(self._config.auth_url, keep_logged, payload)

    async def logout(self) -> None:
        await self._token_cache.remove(self._config.token_cache_key)
        logger.debug("Session token %r removed", self._config.token_cache_key)

    async def check_auth(self) -> AuthResult:
        """Re-validate the cached token against ``check_url``.

        The token is written back to the tier it was read from.
        """
        entry = await self._token_cache.read(self._config.token_cache_key)
        return await self._perform_auth(self._config.check_url, entry.persistent, entry.value)

    async def get_identity(self, user: Any = None) -> str:
        return self._identity.get_identity(user)

    async def get_tenant_identity(self, user: Any = None) -> Optional[str]:
        return self._identity.get_tenant_identity(user)

    async def can(self, user: Any, action: Any, subject: Any = None) -> None:
        await self._gate.can(user, action, subject)

    # ------------------------------------------------------------------ #
    # Pipeline
    # ------------------------------------------------------------------ #

    async def _perform_auth(
        self, url: str, keep_logged: bool, token_or_credentials: Any = None
    ) -> AuthResult:
        if not token_or_credentials:
            raise UnauthorizedError()

        options = self._build_request(token_or_credentials)
        logger.debug(
            "Authenticating against %s with %s",
            url, "bearer token" if "Authorization" in options.headers else "credentials",
        )
        response = await self._executor.execute(
            url, options, self._config.retries, self._config.backoff,
        )

        user = self._config.extract_user(response)
        token = self._config.extract_token(response)
        if token is not None and not isinstance(token, str):
            token = str(token)
        await self._token_cache.write(self._config.token_cache_key, token, keep_logged)
        return AuthResult(data=user)

    @staticmethod
    def _build_request(token_or_credentials: Any) -> RequestOptions:
        """Shape a bearer request for a token string, a JSON body for anything else."""
        if isinstance(token_or_credentials, str):
            return RequestOptions(
                method="POST",
                headers={"Authorization": f"Bearer {token_or_credentials}"},
                body=json.dumps({}),
            )
        if isinstance(token_or_credentials, Mapping):
            token_or_credentials = dict(token_or_credentials)
        return RequestOptions(method="POST", body=json.dumps(token_or_credentials or {}))


def create_auth_provider(
    auth_url: str,
    *,
    transport: Optional[Transport] = None,
    token_cache: Optional[TokenStore] = None,
    persistent: Optional[StorageTier] = None,
    ephemeral: Optional[StorageTier] = None,
    **options: Any,
) -> SimpleAuthProvider:
    """Build a :class:`SimpleAuthProvider` from keyword options.

    Every :class:`~rbauth.models.ProviderConfig` field is accepted as a
    keyword.  Unless a *token_cache* or *persistent* tier is given, the
    persistent tier is a :class:`~rbauth.auth.storage.DiskStorage` under
    the user's data directory.  Release it with :meth:`SimpleAuthProvider.close`
    or by using the provider as an async context manager.

    Example::

        provider = create_auth_provider(
            "https://api.example.com/auth/login",
            check_url="https://api.example.com/auth/me",
            acl=lambda user, action, subject: "admin" in user["roles"],
        )
    """
    config = ProviderConfig(auth_url=auth_url, **options)
    if token_cache is None and persistent is None:
        persistent = DiskStorage()
    return SimpleAuthProvider(
        config,
        transport=transport,
        token_cache=token_cache,
        persistent=persistent,
        ephemeral=ephemeral,
    )
