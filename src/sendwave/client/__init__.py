"""HTTP client package for sendwave.

Provides :class:`RequestClient`, the asynchronous client every resource is
built on, and the :class:`JsonBody` / :class:`RawBody` pair it returns.

Example::

    from sendwave.client import RequestClient

    async with RequestClient(settings, token_store) as client:
        body = await client.send("/api/campaigns/abc")
"""

from sendwave.client.request_client import RequestClient
from sendwave.client.response import JsonBody, ParsedBody, RawBody

__all__ = ["RequestClient", "JsonBody", "ParsedBody", "RawBody"]
