"""Login, registration and current-user helpers.

:class:`AuthApi` is the only writer of the token store on the normal path:
a successful :meth:`~AuthApi.login` or :meth:`~AuthApi.register` stores
the returned token, :meth:`~AuthApi.logout` clears it.  The login and
register calls are sent with ``auth=False`` so a stale token is never
presented to them.

Example::

    async with RequestClient(settings, store) as client:
        session = await AuthApi(client).login("ana@example.com", "s3cret")
        print(session.user.name)
"""

from __future__ import annotations

import logging
from typing import Optional

from sendwave.auth.token_store import TokenProvider
from sendwave.client.request_client import RequestClient
from sendwave.exceptions import HTTPStatusError
from sendwave.models import AuthSession, User
from sendwave.resources.base import validate_as

logger = logging.getLogger(__name__)


class AuthApi:
    """Session operations against ``/api/auth``.

    Args:
        client: An open :class:`~sendwave.client.RequestClient`.
        token_store: Where tokens are written.  Defaults to the client's
            own token provider.

    Raises:
        ValueError: If neither a token store nor a client token provider
            is available.
    """

    def __init__(self, client: RequestClient, token_store: Optional[TokenProvider] = None) -> None:
        store = token_store if token_store is not None else client.token_provider
        if store is None:
            raise ValueError("AuthApi needs a token store to persist the session")
        self._client = client
        self._store = store

    async def login(self, email: str, password: str) -> AuthSession:
        """Authenticate with email and password and store the token."""
        data = await self._client.send_json(
            "/api/auth/login",
            method="POST",
            body={"email": email, "password": password},
            auth=False,
        )
        return self._start_session(data)

    async def register(self, email: str, password: str, name: str) -> AuthSession:
        """Create an account, then store the token it comes with."""
        data = await self._client.send_json(
            "/api/auth/register",
            method="POST",
            body={"email": email, "password": password, "name": name},
            auth=False,
        )
        return self._start_session(data)

    async def me(self) -> User:
        """Return the user the stored token belongs to."""
        data = await self._client.send_json("/api/auth/me")
        user = data.get("user") if isinstance(data, dict) else None
        return validate_as(User, user)

    def logout(self) -> None:
        self._store.clear_token()
        logger.debug("Session token cleared")

    async def restore(self) -> Optional[User]:
        """Check a previously stored token.

        Returns:
            The current user, or ``None`` when no token is stored or the
            server rejected it.  A rejected token is cleared.

        Raises:
            TransportError: The server could not be reached; the token is
                kept.
        """
        if not self._store.get_token():
            return None
        try:
            return await self.me()
        except HTTPStatusError as exc:
            logger.info("Stored session is no longer valid (%s); clearing it", exc)
            self._store.clear_token()
            return None

    def _start_session(self, data: object) -> AuthSession:
        session = validate_as(AuthSession, data)
        self._store.set_token(session.token)
        logger.debug("Session started for %s", session.user.email)
        return session
