"""rbauth -- a small authentication provider for JSON login endpoints.

The provider turns credentials, or a token cached from an earlier login,
into an authenticated user session, checks actions against a host-supplied
policy, and keeps the session token between runs.

Typical usage::

    from rbauth import create_auth_provider

    provider = create_auth_provider("https://api.example.com/auth/login")
    result = await provider.login({"email": "a@b.com", "password": "pw"}, keep_logged=True)
    await provider.can(result.data, "posts.edit")

Modules:
    app: Typer command line (``rbauth login``, ``check``, ``whoami``, ``logout``).
    auth: The provider, token cache, authorization gate and identity resolver.
    client: HTTP transport and the retrying request executor.
    models: Pydantic models shared across the package.
    config: XDG-aware configuration and credential source resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting for the command line.
"""

__version__ = "0.1.0"

from rbauth.auth import AuthProvider, SimpleAuthProvider, create_auth_provider  # noqa: E402
from rbauth.models import AuthResult, CacheEntry, ProviderConfig  # noqa: E402

__all__ = [
    "AuthProvider",
    "AuthResult",
    "CacheEntry",
    "ProviderConfig",
    "SimpleAuthProvider",
    "create_auth_provider",
]
