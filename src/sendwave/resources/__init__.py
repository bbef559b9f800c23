"""API resources with shared request state.

Every resource exposes ``loading`` and ``error`` alongside its async
operations; see :mod:`sendwave.resources.base` for the contract.

- :class:`CampaignsResource` -- campaigns.
- :class:`ContactsResource` -- contact lists and contacts.
"""

from sendwave.resources.base import RequestState, Resource
from sendwave.resources.campaigns import CampaignsResource
from sendwave.resources.contacts import ContactsResource

__all__ = ["CampaignsResource", "ContactsResource", "RequestState", "Resource"]
