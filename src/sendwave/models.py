"""Canonical Pydantic models shared across all sendwave modules.

The models fall into three groups:

**Client models** -- :class:`HTTPMethod`, :class:`RequestOptions` and
:class:`ClientSettings`, consumed by :mod:`sendwave.client`.

**Persisted configuration** -- :class:`UserConfig`, stored as JSON in the
user's config directory by :mod:`sendwave.config`.

**Domain entities** -- campaigns, contact lists, contacts and users as the
server returns them. Entity models use ``extra="allow"`` so fields the
server adds (joined names, organisation ids) survive validation.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# --- Client models ---


class HTTPMethod(str, enum.Enum):
    """HTTP methods the request client accepts."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class RequestOptions(BaseModel):
    """Per-call options for :meth:`~sendwave.client.RequestClient.send`.

    ``body`` is serialised with :func:`json.dumps` at send time, so any
    JSON-serialisable value is accepted here; ``None`` means no body at all.

    Example::

        RequestOptions(method="PATCH", body={"status": "paused"})
    """

    model_config = ConfigDict(extra="forbid")

    method: HTTPMethod = Field(default=HTTPMethod.GET)
    body: Any = Field(default=None, description="JSON-serialisable request body")
    auth: bool = Field(
        default=True,
        description="Attach the stored bearer token when one is present",
    )

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value


class ClientSettings(BaseModel):
    """Connection settings resolved once per process.

    See :func:`~sendwave.config.resolve_settings` for the precedence chain.
    """

    base_url: str = Field(
        default="",
        description="Prefix joined verbatim with every endpoint path",
    )
    timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds; None waits indefinitely",
    )
    verify_ssl: bool = Field(default=True, description="Verify TLS certificates")


class UserConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/sendwave/config.json``."""

    model_config = ConfigDict(extra="allow")

    api_url: Optional[str] = None
    timeout: Optional[float] = None
    verify_ssl: bool = True


# --- Auth ---


class User(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    email: str
    name: str


class AuthSession(BaseModel):
    """Response of the login and register endpoints."""

    model_config = ConfigDict(extra="allow")

    user: User
    token: str


# --- Campaigns ---


class CampaignStatus(str, enum.Enum):
    """Lifecycle states accepted by ``PATCH /api/campaigns/{id}/status``."""

    PENDING = "pending"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Campaign(BaseModel):
    """A message-sending campaign.

    ``list_name``, ``message_name`` and ``connection_name`` are joined in by
    the list endpoint and absent elsewhere.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    user_id: Optional[str] = None
    name: str
    connection_id: Optional[str] = None
    list_id: Optional[str] = None
    message_id: Optional[str] = None
    status: CampaignStatus = CampaignStatus.PENDING
    scheduled_at: Optional[datetime] = None
    min_delay: Optional[int] = None
    max_delay: Optional[int] = None
    sent_count: int = 0
    failed_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    list_name: Optional[str] = None
    message_name: Optional[str] = None
    connection_name: Optional[str] = None


class CampaignStats(BaseModel):
    total: int = 0
    sent: int = 0
    failed: int = 0
    pending: int = 0


class CampaignWithStats(BaseModel):
    """Response of ``GET /api/campaigns/{id}/stats``."""

    campaign: Campaign
    stats: CampaignStats


class CreateCampaignData(BaseModel):
    """Request body for ``POST /api/campaigns``."""

    name: str
    connection_id: str
    list_id: str
    message_id: str
    scheduled_at: Optional[str] = None
    min_delay: Optional[int] = None
    max_delay: Optional[int] = None


# --- Contacts ---


class ContactList(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    user_id: Optional[str] = None
    contact_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Contact(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    list_id: Optional[str] = None
    name: str
    phone: str
    created_at: Optional[datetime] = None


class NewContact(BaseModel):
    """A contact to add or import; the server assigns the id."""

    name: str
    phone: str


class ImportResult(BaseModel):
    """Response of ``POST /api/contacts/lists/{id}/import``."""

    model_config = ConfigDict(extra="allow")

    imported: int
