"""Configuration management with XDG paths, atomic writes, and precedence resolution.

This module handles all persistent state for memey:

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.memey/`` on macOS and Windows. See :func:`get_config_dir`,
  :func:`get_cache_dir`, :func:`get_data_dir`.
* **Settings** -- a single :class:`~memey.models.Settings` JSON file
  holding the API base URL and request timeout.
* **Precedence resolution** -- :func:`resolve_settings` layers environment
  variables over the settings file over built-in defaults.
* **Bundled data** -- :func:`bundled_data_path` locates the seed template
  catalog, expression table and sample credentials shipped in the package.

All file writes use an atomic temp-file-then-rename strategy
(:func:`atomic_write`) so that an interrupted ``update`` or ``login`` never
leaves a truncated document behind.
"""

from __future__ import annotations

import json
import os
import platform
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from memey.exceptions import ConfigError
from memey.models import Settings

_APP_NAME = "memey"
_CONFIG_FILENAME = "config.json"

BUNDLED_DATA_DIR = Path(__file__).parent / "data"


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

    On Linux/BSD: ``$XDG_CONFIG_HOME/memey/`` (default ``~/.config/memey/``).
    On macOS/Windows: ``~/.memey/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CONFIG_HOME", (".config",)) / _APP_NAME
    else:
        path = _fallback_base_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_cache_dir() -> Path:
    """Return the cache directory, creating it if necessary.

    Holds images downloaded by ``--open-locally``; safe to delete.

    On Linux/BSD: ``$XDG_CACHE_HOME/memey/`` (default ``~/.cache/memey/``).
    On macOS/Windows: ``~/.memey/cache/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_CACHE_HOME", (".cache",)) / _APP_NAME
    else:
        path = _fallback_base_dir() / "cache"
    path.mkdir(parents=True, exist_ok=True)
    return path


def get_data_dir() -> Path:
    """Return the data directory (templates, credentials, crash logs), creating it if necessary.

    On Linux/BSD: ``$XDG_DATA_HOME/memey/`` (default ``~/.local/share/memey/``).
    On macOS/Windows: ``~/.memey/data/``.
    """
    if _is_xdg_platform():
        path = _xdg_base("XDG_DATA_HOME", (".local", "share")) / _APP_NAME
    else:
        path = _fallback_base_dir() / "data"
    path.mkdir(parents=True, exist_ok=True)
    return path


def bundled_data_path(filename: str) -> Path:
    """Return the path of a data file shipped inside the package."""
    return BUNDLED_DATA_DIR / filename


# --- Atomic file writes ---


def atomic_write(path: Path, data: str, mode: Optional[int] = None) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is an atomic rename on POSIX systems. When *mode* is
    given the permissions are applied to the temp file before any content
    is written. On any failure the temp file is removed.
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
        fd = None  # prevent double-close below
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


# --- Settings ---


def _settings_path() -> Path:
    return get_config_dir() / _CONFIG_FILENAME


def load_settings() -> Settings:
    """Load settings from the config directory.

    Returns:
        The deserialised :class:`~memey.models.Settings`, or the defaults
        when no settings file exists.

    Raises:
        ConfigError: If the file exists but contains invalid JSON or fails
            validation.
    """
    path = _settings_path()
    if not path.is_file():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return Settings.model_validate(data)
    except (json.JSONDecodeError, ValidationError, ValueError) as exc:
        raise ConfigError(f"Invalid settings at {path}: {exc}") from exc


def resolve_settings() -> Settings:
    """Resolve settings with the full precedence chain.

    Precedence (high to low):
        1. Environment variables (``MEMEY_API_URL``, ``MEMEY_TIMEOUT``)
        2. User config (``~/.config/memey/config.json``)
        3. Defaults

    Raises:
        ConfigError: If the settings file or ``MEMEY_TIMEOUT`` is invalid.
    """
    settings = load_settings()

    env_url = os.environ.get("MEMEY_API_URL")
    if env_url:
        settings.api_url = env_url

    env_timeout = os.environ.get("MEMEY_TIMEOUT")
    if env_timeout:
        try:
            timeout = float(env_timeout)
        except ValueError:
            raise ConfigError(
                f"MEMEY_TIMEOUT must be a number of seconds, got {env_timeout!r}"
            ) from None
        if timeout <= 0:
            raise ConfigError(f"MEMEY_TIMEOUT must be positive, got {env_timeout!r}")
        settings.timeout = timeout

    return settings
