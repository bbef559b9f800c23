"""Authentication for sendwave.

- :class:`TokenProvider` -- the interface the request client reads the
  bearer token through.
- :class:`FileTokenStore` / :class:`MemoryTokenStore` -- implementations.
- :class:`AuthApi` -- login, registration and current-user calls that
  write the token store.

Typical usage::

    from sendwave.auth import AuthApi, FileTokenStore

    store = FileTokenStore()
    async with RequestClient(settings, store) as client:
        await AuthApi(client).login(email, password)
"""

from sendwave.auth.session import AuthApi
from sendwave.auth.token_store import FileTokenStore, MemoryTokenStore, TokenProvider

__all__ = [
    "AuthApi",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenProvider",
]
