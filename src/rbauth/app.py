"""Typer application and CLI entry point for rbauth.

The command line drives a :class:`~rbauth.auth.provider.SimpleAuthProvider`
configured from ``--config``, ``RBAUTH_*`` environment variables and the
user config file (see :func:`rbauth.config.load_provider_config`).  Tokens
of ``login --keep`` sessions are kept in the on-disk tier, so ``check``,
``whoami`` and ``logout`` work across invocations.

Every :class:`~rbauth.exceptions.RbAuthError` is reported on stderr and
turned into the error's ``exit_code``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.logging import RichHandler

from rbauth import __version__
from rbauth.auth.provider import SimpleAuthProvider
from rbauth.auth.storage import DiskStorage
from rbauth.config import load_provider_config, resolve_credential
from rbauth.exceptions import RbAuthError
from rbauth.output import (
    OutputFormat,
    OutputManager,
    error,
    info,
    print_json,
    set_output,
    success,
    suggest,
)

T = TypeVar("T")

app = typer.Typer(
    name="rbauth",
    help="Log in to a JSON auth endpoint and manage the cached session.",
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rbauth {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    config: Optional[str] = typer.Option(
        None, "--config", "-c", help="Path to a JSON provider config file."
    ),
    auth_url: Optional[str] = typer.Option(
        None, "--auth-url", help="Login endpoint (overrides config)."
    ),
    check_url: Optional[str] = typer.Option(
        None, "--check-url", help="Session check endpoint (overrides config)."
    ),
    json_output: bool = typer.Option(False, "--json", help="JSON output format."),
    no_color: bool = typer.Option(False, "--no-color", help="Disable color output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug output."),
) -> None:
    """Install the output manager and logging, and remember provider overrides."""
    output = OutputManager(
        format=OutputFormat.JSON if json_output else OutputFormat.AUTO,
        no_color=no_color,
        quiet=quiet,
        verbose=verbose,
    )
    set_output(output)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True, no_color=no_color), show_path=False)],
        force=True,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["auth_url"] = auth_url
    ctx.obj["check_url"] = check_url


def _build_provider(ctx: typer.Context) -> SimpleAuthProvider:
    obj = ctx.obj or {}
    config = load_provider_config(
        obj.get("config"),
        auth_url=obj.get("auth_url"),
        check_url=obj.get("check_url"),
    )
    return SimpleAuthProvider(config, persistent=DiskStorage())


def _run(ctx: typer.Context, action: Callable[[SimpleAuthProvider], Awaitable[T]]) -> T:
    """Run *action* against a fresh provider, mapping rbauth errors to exit codes."""
    try:
        provider = _build_provider(ctx)
    except RbAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    try:
        return asyncio.run(action(provider))
    except RbAuthError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    finally:
        provider.close()


@app.command("login")
def login_command(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", help="Login identifier."),
    password_source: str = typer.Option(
        "prompt", "--password-source", help="Password source: env:VAR, file:/path, or prompt."
    ),
    keep: bool = typer.Option(
        False, "--keep/--no-keep", help="Persist the session token across runs."
    ),
) -> None:
    """Log in with email and password and print the user record."""

    async def _login(provider: SimpleAuthProvider) -> dict[str, Any]:
        password = resolve_credential(password_source)
        result = await provider.login({"email": email, "password": password}, keep_logged=keep)
        return {"user": result.data, "identity": await provider.get_identity(result.data)}

    outcome = _run(ctx, _login)
    success(f"Logged in as {outcome['identity'] or 'unknown user'}.")
    if not keep:
        suggest("The session ends with this process; use --keep to stay logged in.")
    print_json(outcome["user"])


@app.command("check")
def check_command(ctx: typer.Context) -> None:
    """Validate the cached session token and print the user record."""

    async def _check(provider: SimpleAuthProvider) -> Any:
        return (await provider.check_auth()).data

    print_json(_run(ctx, _check))


@app.command("whoami")
def whoami_command(ctx: typer.Context) -> None:
    """Validate the cached session and print identity and tenant."""

    async def _whoami(provider: SimpleAuthProvider) -> dict[str, Any]:
        user = (await provider.check_auth()).data
        return {
            "identity": await provider.get_identity(user),
            "tenant": await provider.get_tenant_identity(user),
        }

    print_json(_run(ctx, _whoami))


@app.command("logout")
def logout_command(ctx: typer.Context) -> None:
    """Forget the cached session token."""

    async def _logout(provider: SimpleAuthProvider) -> None:
        await provider.logout()

    _run(ctx, _logout)
    info("Logged out.")


def main() -> None:
    """Console-script entry point declared in ``pyproject.toml``."""
    app()
