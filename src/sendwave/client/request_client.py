"""Asynchronous request client for the campaign messaging API.

:class:`RequestClient` wraps :class:`httpx.AsyncClient` and performs one
API call per :meth:`~RequestClient.send`:

- **Auth injection** -- the bearer token from the injected
  :class:`~sendwave.auth.token_store.TokenProvider` is attached unless the
  call opts out with ``auth=False``.  A missing token is not an error; the
  request goes out unauthenticated and the server decides.
- **JSON bodies** -- ``body`` is serialised with :func:`json.dumps`;
  serialisation errors propagate unchanged.
- **Single body read** -- the response body is read to text once and all
  interpretation works from that text (see :mod:`sendwave.client.response`).
- **Error normalisation** -- non-2xx responses raise
  :class:`~sendwave.exceptions.HTTPStatusError` carrying one display-ready
  message; network failures raise
  :class:`~sendwave.exceptions.TransportError`.

There is no retry, caching, or cancellation: each call is a single
best-effort attempt.  Concurrent calls share nothing but the connection
pool and a read-only view of the token provider.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

import httpx

from sendwave.client.response import (
    BODY_PREVIEW_CHARS,
    ParsedBody,
    classify_body,
    error_message,
    looks_like_html,
    looks_like_json,
    read_text,
)
from sendwave.exceptions import HTTPStatusError, TransportError
from sendwave.models import ClientSettings, RequestOptions

if TYPE_CHECKING:
    from sendwave.auth.token_store import TokenProvider

logger = logging.getLogger(__name__)


class RequestClient:
    """Asynchronous HTTP client for API calls.

    Must be used as an async context manager so that the underlying
    connection pool is opened and closed.

    Args:
        settings: Base URL, timeout and TLS settings.  Defaults to an empty
            base URL, so endpoints must then be absolute URLs.
        token_provider: Source of the bearer token.  When ``None``, no
            ``Authorization`` header is ever sent.
        transport: Optional httpx transport, e.g. an
            :class:`httpx.MockTransport` for tests.

    Example::

        async with RequestClient(settings, FileTokenStore()) as client:
            body = await client.send("/api/campaigns")
            campaigns = body.json()
    """

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        token_provider: Optional[TokenProvider] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._token_provider = token_provider
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def token_provider(self) -> Optional[TokenProvider]:
        return self._token_provider

    # ------------------------------------------------------------------ #
    # Async context manager
    # ------------------------------------------------------------------ #

    async def __aenter__(self) -> RequestClient:
        self._client = httpx.AsyncClient(
            timeout=self._settings.timeout,
            verify=self._settings.verify_ssl,
            follow_redirects=True,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *args: object) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    async def send(
        self,
        endpoint: str,
        options: Optional[RequestOptions] = None,
        **overrides: Any,
    ) -> ParsedBody:
        """Perform one API call and return the interpreted response body.

        Args:
            endpoint: Path joined verbatim to the configured base URL.  It
                is not validated; a malformed path fails however the
                server or the network fails it.
            options: Method, body and auth flag.  Defaults to an
                authenticated GET without body.
            **overrides: ``method``, ``body`` or ``auth`` given directly,
                applied on top of *options*.

        Returns:
            A :class:`~sendwave.client.response.JsonBody` or
            :class:`~sendwave.client.response.RawBody`.

        Raises:
            HTTPStatusError: The server answered with a non-2xx status.
            TransportError: No response was received.
            TypeError: *body* contains a value JSON cannot encode.
            ValueError: *body* contains a circular reference.
            pydantic.ValidationError: An override is not one of ``method``,
                ``body`` or ``auth``, or has an invalid value.
        """
        assert self._client is not None, "Client not initialised -- use as async context manager"

        opts = _resolve_options(options, overrides)
        method = opts.method.value
        url = f"{self._settings.base_url}{endpoint}"

        headers = self._build_headers(opts.auth)
        content = json.dumps(opts.body) if opts.body is not None else None

        try:
            request = self._client.build_request(method, url, headers=headers, content=content)
            response = await self._client.send(request, stream=True)
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            logger.error(
                "Request failed without a response: %s %s: %s",
                method,
                url,
                exc,
                extra={"url": url, "method": method},
            )
            raise TransportError(f"Could not reach the server ({url}): {exc}") from exc

        text = await read_text(response)
        status = response.status_code
        content_type = response.headers.get("content-type", "")
        body = classify_body(text, content_type)

        if not looks_like_json(text, content_type) and looks_like_html(text):
            logger.warning(
                "Received HTML instead of JSON: %s %s (status %s): %s",
                method,
                url,
                status,
                text[:BODY_PREVIEW_CHARS],
                extra={
                    "url": url,
                    "status": status,
                    "method": method,
                    "body_preview": text[:BODY_PREVIEW_CHARS],
                },
            )

        if not response.is_success:
            message, details = error_message(body, status)
            logger.error(
                "API error: %s %s -> %s (%s) request=%s response=%s",
                method,
                url,
                status,
                content_type or "no content-type",
                content,
                body.as_dict(),
                extra={
                    "url": url,
                    "status": status,
                    "content_type": content_type,
                    "request_body": content,
                    "response_body": body.as_dict(),
                },
            )
            raise HTTPStatusError(message, status_code=status, details=details, body=body)

        return body

    async def send_json(
        self,
        endpoint: str,
        options: Optional[RequestOptions] = None,
        **overrides: Any,
    ) -> Any:
        """Like :meth:`send` but unwrap the JSON value.

        Raises:
            ResponseParseError: The successful response was not JSON.
        """
        body = await self.send(endpoint, options, **overrides)
        return body.json()

    async def get(self, endpoint: str, **kwargs: Any) -> ParsedBody:
        return await self.send(endpoint, method="GET", **kwargs)

    async def post(self, endpoint: str, **kwargs: Any) -> ParsedBody:
        return await self.send(endpoint, method="POST", **kwargs)

    async def put(self, endpoint: str, **kwargs: Any) -> ParsedBody:
        return await self.send(endpoint, method="PUT", **kwargs)

    async def patch(self, endpoint: str, **kwargs: Any) -> ParsedBody:
        return await self.send(endpoint, method="PATCH", **kwargs)

    async def delete(self, endpoint: str, **kwargs: Any) -> ParsedBody:
        return await self.send(endpoint, method="DELETE", **kwargs)

    # ------------------------------------------------------------------ #
    # Private helpers
    # ------------------------------------------------------------------ #

    def _build_headers(self, auth: bool) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if auth and self._token_provider is not None:
            token = self._token_provider.get_token()
            if token:
                headers["Authorization"] = f"Bearer {token}"
        return headers


def _resolve_options(options: Optional[RequestOptions], overrides: dict[str, Any]) -> RequestOptions:
    if options is None:
        return RequestOptions(**overrides)
    if not overrides:
        return options
    merged = {"method": options.method, "body": options.body, "auth": options.auth}
    merged.update(overrides)
    return RequestOptions(**merged)
