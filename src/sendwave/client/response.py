"""Response interpretation -- body reading, content sniffing, error messages.

The request client hands every response to this module exactly once:

1. :func:`read_text` consumes the body and decodes it to text.  A failed
   read yields ``""`` so that the status check still runs.
2. :func:`classify_body` turns that text into a :class:`ParsedBody`, either
   :class:`JsonBody` or :class:`RawBody`.  Servers behind a misconfigured
   proxy often answer with HTML or with JSON under the wrong content type,
   so the declared type is not trusted on its own.
3. :func:`error_message` derives the display message for a failed call.

Callers never receive a raw-text wrapper where they expected structured
data by accident: :meth:`ParsedBody.json` raises
:class:`~sendwave.exceptions.ResponseParseError` for raw bodies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Union

import httpx

from sendwave.exceptions import ResponseParseError

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
BODY_PREVIEW_CHARS = 300


@dataclass(frozen=True)
class JsonBody:
    """A response body that parsed as JSON."""

    value: Any

    def json(self) -> Any:
        return self.value

    def as_dict(self) -> Any:
        return self.value

    def get(self, key: str, default: Any = None) -> Any:
        """Look up *key* when the value is a JSON object."""
        if isinstance(self.value, dict):
            return self.value.get(key, default)
        return default


@dataclass(frozen=True)
class RawBody:
    """A response body kept as literal text because it is not JSON."""

    text: str

    def json(self) -> Any:
        """Raise, since there is no JSON value to unwrap."""
        preview = self.text.strip()[:80]
        raise ResponseParseError(
            f"Expected a JSON response but received: {preview!r}"
            if preview
            else "Expected a JSON response but received an empty body"
        )

    def as_dict(self) -> dict[str, str]:
        """Return the ``{"raw": text}`` wrapper form."""
        return {"raw": self.text}

    def get(self, key: str, default: Any = None) -> Any:
        return default


ParsedBody = Union[JsonBody, RawBody]


async def read_text(response: httpx.Response) -> str:
    """Read and decode the whole body of a streamed *response*.

    This is the only place a body is read.  Any failure while reading or
    decoding is logged at debug level and treated as an empty body.
    """
    try:
        await response.aread()
        return response.text
    except (httpx.HTTPError, httpx.StreamError, UnicodeDecodeError) as exc:
        logger.debug("Could not read response body from %s: %s", response.url, exc)
        return ""
    finally:
        await response.aclose()


def looks_like_json(text: str, content_type: str) -> bool:
    """Return True when the body should be handed to the JSON parser."""
    if JSON_CONTENT_TYPE in content_type.lower():
        return True
    stripped = text.strip()
    return stripped.startswith("{") or stripped.startswith("[")


def looks_like_html(text: str) -> bool:
    """Return True for bodies that look like an HTML document."""
    stripped = text.strip()
    return stripped.startswith("<!") or "<html" in stripped.lower()


def classify_body(text: str, content_type: str) -> ParsedBody:
    """Interpret response *text* given its declared *content_type*.

    JSON is attempted when the content type says so or the text starts
    with ``{`` or ``[``; a parse failure degrades to :class:`RawBody`.
    Everything else is :class:`RawBody` directly.
    """
    if looks_like_json(text, content_type):
        try:
            return JsonBody(json.loads(text))
        except ValueError:
            return RawBody(text)
    return RawBody(text)


def error_message(body: ParsedBody, status_code: int) -> tuple[str, Any]:
    """Build the display message and ``details`` for a failed response.

    The message is the payload's ``error`` field, else its ``message``
    field, else a generic text carrying the status code.  When the payload
    has ``details`` they are appended after a colon.

    Returns:
        ``(message, details)`` where *details* is ``None`` when absent or
        an empty string. Other falsy values such as ``0`` are kept.
    """
    message = body.get("error") or body.get("message")
    if not message:
        message = f"Request failed ({status_code})"
    elif not isinstance(message, str):
        message = json.dumps(message, ensure_ascii=False)

    details = body.get("details")
    if details is not None and details != "":
        text = details if isinstance(details, str) else json.dumps(details, ensure_ascii=False)
        message = f"{message}: {text}"
    else:
        details = None
    return message, details
