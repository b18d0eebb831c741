"""Abstract host contract for authentication providers.

A host application drives authentication exclusively through the six
coroutines declared on :class:`AuthProvider`.  It never depends on a
concrete provider class, so alternative implementations (SSO, API keys,
test doubles) can be swapped in without touching the host.

To implement a new provider, subclass :class:`AuthProvider` and implement
every abstract method.

See Also:
    :class:`rbauth.auth.provider.SimpleAuthProvider` for the HTTP-backed
    implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from rbauth.models import AuthResult


class AuthProvider(ABC):
    """The capability set every provider offers to its host."""

    @abstractmethod
    async def login(
        self, credentials: Mapping[str, Any], keep_logged: bool = False
    ) -> AuthResult:
        """Open a session from user-supplied credentials.

        Args:
            credentials: Opaque mapping, typically login and password.
            keep_logged: Persist the session across restarts.

        Returns:
            An :class:`~rbauth.models.AuthResult` wrapping the user record.

        Raises:
            UnauthorizedError: If *credentials* is empty.
        """
        ...

    @abstractmethod
    async def logout(self) -> None:
        """Forget the current session.  Never fails when already logged out."""
        ...

    @abstractmethod
    async def check_auth(self) -> AuthResult:
        """Restore the session from the cached token.

        Raises:
            UnauthorizedError: If no token is cached.
        """
        ...

    @abstractmethod
    async def get_identity(self, user: Any = None) -> str:
        """Return a display identity for *user*."""
        ...

    @abstractmethod
    async def get_tenant_identity(self, user: Any = None) -> Optional[str]:
        """Return the tenant *user* belongs to, or ``None``."""
        ...

    @abstractmethod
    async def can(self, user: Any, action: Any, subject: Any = None) -> None:
        """Return normally if *user* may perform *action* on *subject*.

        Raises:
            UnauthorizedError: If *user* is missing.
            InvalidActionError: If *action* is missing.
            ForbiddenError: If the policy denies the action.
        """
        ...
