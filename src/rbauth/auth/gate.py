"""Authorization gate in front of the host's policy callback."""

from __future__ import annotations

import inspect
import logging
from typing import Any, Callable, Optional

from rbauth.exceptions import ForbiddenError, InvalidActionError, UnauthorizedError

logger = logging.getLogger(__name__)


class AuthorizationGate:
    """Validates a ``(user, action, subject)`` triple against an optional policy.

    Without a policy every present user may perform every present action.
    Hosts that need deny-by-default must supply a policy.

    Args:
        acl: ``(user, action, subject) -> bool`` or a coroutine function
            returning a bool.
    """

    def __init__(self, acl: Optional[Callable[..., Any]] = None) -> None:
        self._acl = acl

    async def can(self, user: Any, action: Any, subject: Any = None) -> None:
        """Return normally when allowed.

        Raises:
            UnauthorizedError: If *user* is ``None``.
            InvalidActionError: If *action* is empty.
            ForbiddenError: If the policy returns a falsy value.
        """
        if user is None:
            raise UnauthorizedError()
        if not action:
            raise InvalidActionError()
        if self._acl is None:
            return

        allowed = self._acl(user, action, subject)
        if inspect.isawaitable(allowed):
            allowed = await allowed
        if not allowed:
            logger.debug("Policy denied action %r on %r", action, subject)
            raise ForbiddenError()
