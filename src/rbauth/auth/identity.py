"""Display and tenant identity of an opaque user record."""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import ValidationError

from rbauth.models import UserFields

IDENTITY_FIELDS = ("fullname", "name", "username", "email")
"""User fields tried in order when no custom identifier is configured."""


class IdentityResolver:
    """Derives an identity string and an optional tenant from a user record.

    Args:
        user_identifier: ``(user) -> str`` whose result always wins.
        tenant_identifier: ``(user) -> str``.  Without it no tenant is
            ever derived.
    """

    def __init__(
        self,
        user_identifier: Optional[Callable[[Any], Any]] = None,
        tenant_identifier: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self._user_identifier = user_identifier
        self._tenant_identifier = tenant_identifier

    def get_identity(self, user: Any) -> str:
        """Return the first non-empty of :data:`IDENTITY_FIELDS`, or ``""``.

        Mappings and plain objects are both accepted.  ``None`` and values
        that are neither (strings, lists) count as an empty record.
        """
        if self._user_identifier is not None:
            return self._user_identifier(user)

        try:
            fields = UserFields.model_validate(user if user is not None else {})
        except ValidationError:
            return ""
        for name in IDENTITY_FIELDS:
            value = getattr(fields, name)
            if value:
                return str(value)
        return ""

    def get_tenant_identity(self, user: Any) -> Optional[str]:
        if self._tenant_identifier is not None:
            return self._tenant_identifier(user)
        return None
