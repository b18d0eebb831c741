"""Storage tiers backing the token cache.

A tier is a tiny synchronous key/value store in the spirit of browser
``localStorage``/``sessionStorage``:

- :class:`MemoryStorage` -- process-lifetime dict, used as the
  *ephemeral* tier (session-only logins).
- :class:`DiskStorage` -- :mod:`diskcache` directory under the data dir,
  used as the *persistent* tier ("remember me" logins that survive
  restarts).

Hosts can plug any object implementing :class:`StorageTier`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Protocol

import diskcache

from rbauth.config import get_data_dir


class StorageTier(Protocol):
    """Single-key read/write/remove over one storage scope."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed tier that forgets everything when the process exits."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set(self, key: str, value: str) -> None:
        self._items[key] = value

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._items


class DiskStorage:
    """Disk-backed tier built on :class:`diskcache.Cache`.

    The directory is restricted to the current user (``0o700``) since it
    holds bearer tokens.  Entries never expire on their own; they are
    removed by ``logout``.

    Reads and writes are blocking SQLite calls made directly on the
    caller's thread, including from :class:`~rbauth.auth.cache.TokenCache`
    coroutines.  Call :meth:`close` (or close the owning provider) when
    done.

    Args:
        directory: Cache directory.  Defaults to ``<data_dir>/tokens``.

    Example::

        tier = DiskStorage(tmp_path / "tokens")
        tier.set("rb-auth-token", "t1")
        assert tier.get("rb-auth-token") == "t1"
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self._directory = Path(directory) if directory is not None else get_data_dir() / "tokens"
        self._directory.mkdir(parents=True, exist_ok=True)
        os.chmod(self._directory, 0o700)
        self._cache = diskcache.Cache(str(self._directory))

    @property
    def directory(self) -> Path:
        """The filesystem directory holding the cache."""
        return self._directory

    def get(self, key: str) -> Optional[str]:
        return self._cache.get(key)

    def set(self, key: str, value: str) -> None:
        self._cache.set(key, value)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        self._cache.close()
