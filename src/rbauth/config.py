"""Configuration management with XDG paths and precedence resolution.

This module handles all persistent configuration for rbauth:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.rbauth/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.  The persistent token tier lives under the data
  directory.
* **Provider config** -- :func:`load_provider_config` merges explicit
  overrides, ``RBAUTH_*`` environment variables, and a JSON config file
  into one frozen :class:`~rbauth.models.ProviderConfig`.
* **Credential resolution** -- :func:`resolve_credential` reads secrets
  from env vars, files, or interactive prompts.
"""

from __future__ import annotations

import getpass
import json
import os
import platform
import sys
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from rbauth.exceptions import ConfigError
from rbauth.models import ProviderConfig

_APP_NAME = "rbauth"
_CONFIG_FILENAME = "config.json"

ENV_PREFIX = "RBAUTH_"
"""Prefix of every environment variable read by :func:`load_provider_config`."""

_ENV_FIELDS = ("auth_url", "check_url", "token_cache_key", "timeout", "retries", "backoff")


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
    """Fallback base directory for non-XDG platforms (macOS, Windows)."""
    return Path.home() / f".{_APP_NAME}"


def _xdg_base(env_var: str, default_segments: tuple[str, ...]) -> Path:
    """Resolve an XDG base directory from an env var with fallback segments under $HOME."""
    env_value = os.environ.get(env_var, "")
    if env_value:
        return Path(env_value)
    base = Path.home()
    for seg in default_segments:
        base = base / seg
    return base


def get_config_dir() -> Path:
    """Return the configuration directory, creating it if necessary.

    On Linux/BSD: ``$XDG_CONFIG_HOME/rbauth/`` (default ``~/.config/rbauth/``).
    On macOS/Windows: ``~/.rbauth/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (persistent tokens), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/rbauth/`` (default ``~/.local/share/rbauth/``).
    On macOS/Windows: ``~/.rbauth/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Provider config ---


def _config_file_path(path: Optional[str | Path]) -> Path:
    if path is not None:
        return Path(path).expanduser()
    env_path = os.environ.get(f"{ENV_PREFIX}CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return get_config_dir() / _CONFIG_FILENAME


def load_config_file(path: Optional[str | Path] = None) -> dict[str, Any]:
    """Load the raw provider settings from a JSON file.

    Args:
        path: Explicit file path.  Defaults to ``$RBAUTH_CONFIG`` or
            ``<config_dir>/config.json``.

    Returns:
        The parsed JSON object, or an empty dict when the default file does
        not exist.

    Raises:
        ConfigError: If an explicitly requested file is missing, or the file
            is not a JSON object.
    """
    file_path = _config_file_path(path)
    if not file_path.is_file():
        if path is not None:
            raise ConfigError(f"Config file not found: {file_path}")
        return {}
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        raise ConfigError(f"Invalid config at {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config at {file_path}: expected a JSON object")
    return data


def _env_settings() -> dict[str, str]:
    settings: dict[str, str] = {}
    for field in _ENV_FIELDS:
        value = os.environ.get(f"{ENV_PREFIX}{field.upper()}")
        if value:
            settings[field] = value
    return settings


def load_provider_config(
    path: Optional[str | Path] = None,
    **overrides: Any,
) -> ProviderConfig:
    """Resolve provider settings with the full precedence chain.

    Precedence (high to low):
        1. Keyword ``overrides`` whose value is not ``None``
        2. Environment variables (``RBAUTH_AUTH_URL``, ``RBAUTH_CHECK_URL``,
           ``RBAUTH_TOKEN_CACHE_KEY``, ``RBAUTH_TIMEOUT``, ``RBAUTH_RETRIES``,
           ``RBAUTH_BACKOFF``)
        3. JSON config file (see :func:`load_config_file`)
        4. Model defaults

    Callables (extractors, ``acl``) can only be supplied via ``overrides``.

    Raises:
        ConfigError: If the merged settings fail validation (for example no
            ``auth_url`` anywhere).
    """
    merged: dict[str, Any] = dict(load_config_file(path))
    merged.update(_env_settings())
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ProviderConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid provider configuration: {exc}") from exc


# --- Credential source resolution ---


def resolve_credential(source: str) -> str:
    """Resolve a credential from its source descriptor.

    Supported formats:
        - ``"env:VAR_NAME"`` -- reads ``os.environ["VAR_NAME"]``
        - ``"file:/path/to/file"`` -- reads file content, stripped of whitespace
        - ``"prompt"`` -- prompts user interactively (requires a TTY)

    Raises:
        ConfigError: If the source can't be resolved.
    """
    if source.startswith("env:"):
        var_name = source[4:]
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigError(
                f"Environment variable '{var_name}' is not set (source: {source})"
            )
        return value

    if source.startswith("file:"):
        path = Path(source[5:]).expanduser()
        if not path.is_file():
            raise ConfigError(f"Credential file not found: {path} (source: {source})")
        try:
            return path.read_text(encoding="utf-8").strip()
        except OSError as exc:
            raise ConfigError(f"Cannot read credential file {path}: {exc}") from exc

    if source == "prompt":
        if not sys.stdin.isatty():
            raise ConfigError(
                "Cannot prompt for credentials: stdin is not a TTY (source: prompt)"
            )
        return getpass.getpass("Password: ")

    raise ConfigError(f"Unknown credential source format: {source}")
