"""Canonical Pydantic models shared across all rbauth modules.

This is the single source of truth for data shapes in the project.  The
models fall into two groups:

**Configuration** -- fixed once when a provider is built:
    :class:`ProviderConfig`.

**Pipeline values** -- created per call and never retained by the
provider:
    :class:`RequestOptions`, :class:`CacheEntry`, :class:`AuthResult`, and
    :class:`UserFields`.

All models use Pydantic v2.  :class:`ProviderConfig` is frozen so a
provider's endpoints, keys and resilience knobs cannot drift after
construction.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_TOKEN_CACHE_KEY = "rb-auth-token"
DEFAULT_TIMEOUT = 5.0
DEFAULT_RETRIES = 3
DEFAULT_BACKOFF = 0.3


# --- Provider config ---


class ProviderConfig(BaseModel):
    """Immutable configuration of a :class:`~rbauth.auth.provider.SimpleAuthProvider`.

    ``check_url`` falls back to ``auth_url`` when it is omitted or empty.
    The user and token extractors default to reading ``user_key`` and
    ``token_key`` from the decoded response body; a missing key raises
    ``KeyError`` which is propagated to the caller untouched.

    Durations are in seconds.

    Example::

        ProviderConfig(
            auth_url="https://api.example.com/auth/login",
            check_url="https://api.example.com/auth/me",
            retries=5,
        )
    """

    model_config = ConfigDict(frozen=True)

    auth_url: str = Field(description="Endpoint for credential-based login")
    check_url: str = Field(
        default="", description="Endpoint for token-based session checks (defaults to auth_url)"
    )
    user_key: str = Field(default="user", description="Response field holding the user record")
    token_key: str = Field(default="token", description="Response field holding the session token")
    parse_user_details: Optional[Callable[[Any], Any]] = Field(
        default=None, description="Custom (response) -> user extractor"
    )
    parse_token: Optional[Callable[[Any], Any]] = Field(
        default=None, description="Custom (response) -> token extractor"
    )
    token_cache_key: str = Field(
        default=DEFAULT_TOKEN_CACHE_KEY, description="Storage key of the cached token"
    )
    user_identifier: Optional[Callable[[Any], Any]] = Field(
        default=None, description="Custom (user) -> display identity"
    )
    tenant_identifier: Optional[Callable[[Any], Any]] = Field(
        default=None, description="Custom (user) -> tenant identity"
    )
    acl: Optional[Callable[..., Any]] = Field(
        default=None, description="Policy callback (user, action, subject) -> bool"
    )
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Per-attempt timeout")
    retries: int = Field(default=DEFAULT_RETRIES, ge=1, description="Total request attempts")
    backoff: float = Field(default=DEFAULT_BACKOFF, gt=0, description="Initial retry delay")

    @model_validator(mode="before")
    @classmethod
    def _default_check_url(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("check_url"):
            data = {**data, "check_url": data.get("auth_url")}
        return data

    def extract_user(self, response: Any) -> Any:
        """Pull the user record out of a decoded auth response."""
        if self.parse_user_details is not None:
            return self.parse_user_details(response)
        return response[self.user_key]

    def extract_token(self, response: Any) -> Any:
        """Pull the session token out of a decoded auth response."""
        if self.parse_token is not None:
            return self.parse_token(response)
        return response[self.token_key]


# --- Pipeline values ---


class RequestOptions(BaseModel):
    """A single HTTP request as shaped by the auth pipeline."""

    method: str = Field(default="POST")
    headers: dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = Field(default=None, description="Pre-encoded JSON body")


class CacheEntry(BaseModel):
    """Result of a token cache read.

    ``persistent`` tells which storage tier holds ``value``.  It is
    ``False`` whenever ``value`` is ``None``.
    """

    value: Optional[str] = None
    persistent: bool = False


class AuthResult(BaseModel):
    """The success value of ``login`` and ``check_auth``."""

    data: Any = None


class UserFields(BaseModel):
    """The optional display fields looked at when deriving a user's identity.

    Validated from either a mapping or an arbitrary object with
    attributes.  Every other field of the user record is ignored.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    fullname: Any = None
    name: Any = None
    username: Any = None
    email: Any = None
