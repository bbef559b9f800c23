"""Exception hierarchy for sendwave.

All exceptions inherit from :class:`SendwaveError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`sendwave.exit_codes`.
The CLI entry point in :func:`sendwave.app.main` catches ``SendwaveError``
and exits with the appropriate code.

Failures of an API call are tagged with an :class:`ErrorKind` so callers
can branch on the category without parsing message text::

    SendwaveError (exit 1)
    +-- ConfigError                      (exit 1)
    +-- InvalidUsageError                (exit 2)
    +-- RequestError
        +-- TransportError    transport    (exit 6)
        +-- HTTPStatusError   http_status  (exit 3 / 4 / 5 / 1 by status)
        +-- ResponseParseError parse       (exit 1)

Every ``RequestError`` exposes a single display-ready message via
``str(exc)``; the structured fields are there for code that needs them.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING, Any, Optional

from sendwave.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SERVER_ERROR,
)

if TYPE_CHECKING:
    from sendwave.client.response import ParsedBody


class SendwaveError(Exception):
    """Base exception for all sendwave errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(SendwaveError):
    """Raised for configuration problems (unreadable config file, bad values)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(SendwaveError):
    """Raised for invalid CLI input such as a malformed import file."""

    exit_code = EXIT_INVALID_USAGE


class ErrorKind(str, enum.Enum):
    """Category of a failed API call."""

    TRANSPORT = "transport"
    HTTP_STATUS = "http_status"
    PARSE = "parse"


class RequestError(SendwaveError):
    """Base class for every failure of a single API call.

    Attributes:
        kind: The :class:`ErrorKind` tag of the concrete subclass.
        status_code: HTTP status when a response was received, else ``None``.
        details: The ``details`` field of the error payload, if any.
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Any = None,
        exit_code: int | None = None,
    ):
        super().__init__(message, exit_code=exit_code)
        self.status_code = status_code
        self.details = details


class TransportError(RequestError):
    """The request never produced a response (DNS, refused connection, invalid URL)."""

    kind = ErrorKind.TRANSPORT
    exit_code = EXIT_CONNECTION_ERROR


class HTTPStatusError(RequestError):
    """The server answered with a status outside the 2xx range.

    The exit code follows the status: 401/403 map to
    :data:`~sendwave.exit_codes.EXIT_AUTH_FAILURE`, 404 to
    :data:`~sendwave.exit_codes.EXIT_NOT_FOUND` and 5xx to
    :data:`~sendwave.exit_codes.EXIT_SERVER_ERROR`.

    Attributes:
        body: The interpreted response body the message was derived from.
    """

    kind = ErrorKind.HTTP_STATUS

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        details: Any = None,
        body: Optional[ParsedBody] = None,
    ):
        super().__init__(
            message,
            status_code=status_code,
            details=details,
            exit_code=_exit_code_for_status(status_code),
        )
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        """Whether the server rejected the credentials."""
        return self.status_code in (401, 403)

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


class ResponseParseError(RequestError):
    """A successful response did not carry the JSON the caller asked for."""

    kind = ErrorKind.PARSE


def _exit_code_for_status(status: int) -> int:
    if status in (401, 403):
        return EXIT_AUTH_FAILURE
    if status == 404:
        return EXIT_NOT_FOUND
    if status >= 500:
        return EXIT_SERVER_ERROR
    return EXIT_GENERIC_FAILURE
