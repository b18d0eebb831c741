"""Two-tier token cache.

:class:`TokenCache` stores the single session token of a provider in one of
two :class:`~rbauth.auth.storage.StorageTier` instances:

- the **persistent** tier when the user asked to stay logged in,
- the **ephemeral** tier otherwise.

Reads prefer the persistent tier so that a "remember me" login is never
masked by a leftover session-only token.  Writes only touch the tier they
target; :meth:`TokenCache.remove` clears both.

Either tier may be ``None``, in which case writes to it are dropped and
reads skip it.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from rbauth.auth.storage import StorageTier
from rbauth.models import CacheEntry

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Async storage collaborator consumed by the provider.

    :class:`TokenCache` is the default implementation; hosts can supply any
    object with these three coroutines to replace storage entirely.
    """

    async def write(self, key: str, token: str, persistent: bool) -> None: ...

    async def read(self, key: str) -> CacheEntry: ...

    async def remove(self, key: str) -> None: ...


class TokenCache:
    """Reads, writes and removes a named token across two storage tiers.

    Args:
        persistent: Tier that survives restarts, or ``None``.
        ephemeral: Tier scoped to the current session, or ``None``.

    Example::

        cache = TokenCache(persistent=DiskStorage(), ephemeral=MemoryStorage())
        await cache.write("rb-auth-token", "t1", persistent=True)
        entry = await cache.read("rb-auth-token")
        assert entry == CacheEntry(value="t1", persistent=True)
    """

    def __init__(
        self,
        persistent: Optional[StorageTier] = None,
        ephemeral: Optional[StorageTier] = None,
    ) -> None:
        self.persistent = persistent
        self.ephemeral = ephemeral

    async def write(self, key: str, token: str, persistent: bool) -> None:
        """Store *token* in the persistent tier if *persistent*, else in the ephemeral one.

        The other tier is left untouched, so a stale value there stays
        readable until :meth:`remove` is called.
        """
        tier = self.persistent if persistent else self.ephemeral
        if tier is None:
            logger.debug(
                "No %s tier configured, token for %r not cached",
                "persistent" if persistent else "ephemeral", key,
            )
            return
        tier.set(key, token)

    async def read(self, key: str) -> CacheEntry:
        """Return the cached token and the tier holding it.

        The persistent tier wins over the ephemeral one.  When neither holds
        a value the result is ``CacheEntry(value=None, persistent=False)``.
        """
        if self.persistent is not None:
            value = self.persistent.get(key)
            if value:
                return CacheEntry(value=value, persistent=True)
        if self.ephemeral is not None:
            value = self.ephemeral.get(key)
            if value:
                return CacheEntry(value=value, persistent=False)
        return CacheEntry()

    async def remove(self, key: str) -> None:
        """Delete *key* from every configured tier.  Safe when nothing is cached."""
        for tier in (self.persistent, self.ephemeral):
            if tier is not None:
                tier.delete(key)
