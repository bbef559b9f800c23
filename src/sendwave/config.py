"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent configuration for sendwave:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.sendwave/`` on macOS and Windows. See :func:`get_config_dir` and
  :func:`get_data_dir`.
* **User config** -- A single :class:`~sendwave.models.UserConfig` JSON
  file storing the API URL and connection defaults.
* **Precedence resolution** -- :func:`resolve_settings` merges the CLI
  flag, the ``SENDWAVE_API_URL`` environment variable, and the user config
  into the effective :class:`~sendwave.models.ClientSettings`.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) to prevent data loss on crash or power failure.
"""

from __future__ import annotations

import json
import logging
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from sendwave.exceptions import ConfigError
from sendwave.models import ClientSettings, UserConfig

_APP_NAME = "sendwave"
_CONFIG_FILENAME = "config.json"

API_URL_ENV = "SENDWAVE_API_URL"

logger = logging.getLogger(__name__)


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform uses the XDG Base Directory layout (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _fallback_base_dir() -> Path:
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

    On Linux/BSD: ``$XDG_CONFIG_HOME/sendwave/`` (default ``~/.config/sendwave/``).
    On macOS/Windows: ``~/.sendwave/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (session token, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/sendwave/`` (default ``~/.local/share/sendwave/``).
    On macOS/Windows: ``~/.sendwave/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. When *mode* is
    given it is applied to the temp file before any content is written.

    Args:
        path: Destination file.
        data: Text content.
        mode: Optional permission bits, e.g. ``0o600`` for secrets.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        if mode is not None:
            os.chmod(tmp_path, mode)
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise


# --- User config ---


def _config_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_user_config() -> UserConfig:
    """Load the user configuration from the config directory.

    Returns:
        The deserialised :class:`~sendwave.models.UserConfig`, or a default
        instance when the file does not exist.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = _config_path()
    if not path.is_file():
        return UserConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return UserConfig.model_validate(data)
    except (json.JSONDecodeError, ValueError) as exc:
        raise ConfigError(f"Invalid config at {path}: {exc}") from exc


def save_user_config(config: UserConfig) -> Path:
    """Persist the user configuration atomically and return its path."""
    path = _config_path()
    data = config.model_dump(mode="json", exclude_none=True)
    atomic_write(path, json.dumps(data, indent=2) + "\n")
    return path


def save_api_url(api_url: str) -> Path:
    """Store *api_url* as the default base URL in the user config.

    An invalid config file is replaced by a fresh one holding only the URL.
    """
    try:
        config = load_user_config()
    except ConfigError as exc:
        logger.warning("Replacing unreadable config: %s", exc)
        config = UserConfig()
    config.api_url = api_url.rstrip("/")
    return save_user_config(config)


# --- Precedence resolution ---


def resolve_settings(api_url: Optional[str] = None) -> ClientSettings:
    """Resolve the effective client settings.

    Precedence for the base URL (highest first):

    1. *api_url* (the ``--api-url`` CLI flag)
    2. ``SENDWAVE_API_URL`` environment variable
    3. ``api_url`` in the user config file
    4. ``""`` -- endpoints are then used as-is

    Timeout and TLS verification come from the user config.

    Returns:
        The merged :class:`~sendwave.models.ClientSettings`.

    Raises:
        ConfigError: If the user config file is invalid.
    """
    config = load_user_config()

    base_url = api_url
    if base_url is None:
        base_url = os.environ.get(API_URL_ENV) or None
    if base_url is None:
        base_url = config.api_url or ""

    return ClientSettings(
        base_url=base_url,
        timeout=config.timeout,
        verify_ssl=config.verify_ssl,
    )
