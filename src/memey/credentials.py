"""Persisted Imgflip credentials.

Credentials live in ``~/.local/share/memey/credentials.json`` (XDG) or the
platform-equivalent directory as a flat ``{"username", "password"}``
object. Files are written atomically with ``0o600`` permissions so the
password is never world-readable, even momentarily.

When no readable credentials file exists, :meth:`CredentialStore.load`
falls back to the bundled ``sample_credentials.json``, which carries no
username and therefore means "not logged in".
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from memey.config import atomic_write, bundled_data_path, get_data_dir
from memey.models import Credentials
from memey.output import get_output

CREDENTIALS_FILENAME = "credentials.json"
SAMPLE_CREDENTIALS_FILENAME = "sample_credentials.json"


class CredentialStore:
    """Read/write the stored Imgflip credentials.

    Args:
        path: Credentials file; defaults to ``<data_dir>/credentials.json``.

    Example::

        store = CredentialStore()
        store.save("alice", "hunter2")
        assert store.load().username == "alice"
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or get_data_dir() / CREDENTIALS_FILENAME

    @property
    def path(self) -> Path:
        """The filesystem path to the credentials file."""
        return self._path

    def load(self) -> Credentials:
        """Load stored credentials, or the sample defaults.

        Never raises: a missing, unreadable or malformed file yields the
        bundled sample credentials.
        """
        output = get_output()
        loaded = _read_credentials(self._path)
        if loaded is not None:
            output.debug("Config Found...")
            return loaded
        output.debug("Config Not Found...")
        return sample_credentials()

    def save(self, username: str, password: Optional[str]) -> None:
        """Replace the stored credentials wholesale.

        Raises:
            OSError: If the file cannot be written.
        """
        data = Credentials(username=username, password=password or "").model_dump(mode="json")
        atomic_write(self._path, json.dumps(data, indent=4) + "\n", mode=0o600)


def sample_credentials() -> Credentials:
    """Return the bundled sample credentials (empty when the sample is unreadable)."""
    return _read_credentials(bundled_data_path(SAMPLE_CREDENTIALS_FILENAME)) or Credentials()


def _read_credentials(path: Path) -> Optional[Credentials]:
    if not path.is_file():
        return None
    try:
        return Credentials.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (json.JSONDecodeError, ValidationError, OSError, ValueError):
        return None
