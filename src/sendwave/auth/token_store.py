"""Bearer token storage.

The request client reads the current token through the
:class:`TokenProvider` interface it receives at construction; it never
writes.  Writes happen only through :meth:`TokenProvider.set_token` and
:meth:`TokenProvider.clear_token`, called by the session helpers in
:mod:`sendwave.auth.session` on login, registration and logout.

Two implementations are provided:

- :class:`FileTokenStore` -- persists the token in
  ``~/.local/share/sendwave/session.json`` (XDG) with ``0o600``
  permissions, written atomically.
- :class:`MemoryTokenStore` -- keeps the token in process memory; used by
  tests and by embedders that manage persistence themselves.

The token is opaque: there is no expiry tracking and no refresh.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from sendwave.config import atomic_write, get_data_dir

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
_SESSION_FILENAME = "session.json"


class TokenProvider(ABC):
    """Source of the bearer token attached to authenticated requests."""

    @abstractmethod
    def get_token(self) -> Optional[str]:
        """Return the stored token, or ``None`` when logged out."""
        ...

    @abstractmethod
    def set_token(self, token: str) -> None:
        """Replace the stored token."""
        ...

    @abstractmethod
    def clear_token(self) -> None:
        """Forget the stored token. A no-op when none is stored."""
        ...


class MemoryTokenStore(TokenProvider):
    """In-process token storage.

    Example::

        store = MemoryTokenStore("tok123")
        assert store.get_token() == "tok123"
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token

    def clear_token(self) -> None:
        self._token = None


class FileTokenStore(TokenProvider):
    """Token storage backed by a single JSON file.

    The file holds one key, ``auth_token``.  Every write goes to a
    temporary file with ``0o600`` permissions that is then renamed into
    place, so the secret is never world-readable, even momentarily.

    Args:
        path: Optional explicit file path.  Defaults to ``session.json``
            in the data directory.
    """

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path if path is not None else get_data_dir() / _SESSION_FILENAME

    @property
    def path(self) -> Path:
        """The filesystem path of the session file."""
        return self._path

    def get_token(self) -> Optional[str]:
        """Load the token from disk.

        Returns:
            The token, or ``None`` if the file is missing, unreadable, or
            does not hold a non-empty string.
        """
        if not self._path.is_file():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self._path, exc)
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            return None
        return token

    def set_token(self, token: str) -> None:
        """Persist *token* atomically with ``0o600`` permissions.

        Raises:
            OSError: If the file cannot be written.
        """
        text = json.dumps({TOKEN_KEY: token}, indent=2) + "\n"
        atomic_write(self._path, text, mode=0o600)

    def clear_token(self) -> None:
        self._path.unlink(missing_ok=True)
