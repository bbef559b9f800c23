"""Campaign operations.

Endpoints::

    GET    /api/campaigns              list_campaigns()
    POST   /api/campaigns              create_campaign(data)
    PATCH  /api/campaigns/{id}/status  update_status(id, status)
    GET    /api/campaigns/{id}/stats   get_stats(id)
    DELETE /api/campaigns/{id}         delete_campaign(id)
"""

from __future__ import annotations

from typing import Union

from sendwave.models import Campaign, CampaignStatus, CampaignWithStats, CreateCampaignData
from sendwave.resources.base import Resource, validate_as, validate_list


class CampaignsResource(Resource):
    """Create, list, control and delete campaigns.

    Example::

        campaigns = CampaignsResource(client)
        created = await campaigns.create_campaign(
            CreateCampaignData(name="Launch", connection_id="c1", list_id="l1", message_id="m1")
        )
        await campaigns.update_status(created.id, CampaignStatus.RUNNING)
    """

    async def list_campaigns(self) -> list[Campaign]:
        async with self._track("Failed to fetch campaigns"):
            data = await self._client.send_json("/api/campaigns")
            return validate_list(Campaign, data)

    async def create_campaign(self, data: CreateCampaignData) -> Campaign:
        async with self._track("Failed to create campaign"):
            result = await self._client.send_json(
                "/api/campaigns",
                method="POST",
                body=data.model_dump(exclude_none=True),
            )
            return validate_as(Campaign, result)

    async def update_status(
        self, campaign_id: str, status: Union[CampaignStatus, str]
    ) -> Campaign:
        """Move a campaign to *status* (e.g. pause or resume sending)."""
        status = CampaignStatus(status)
        async with self._track("Failed to update campaign status"):
            result = await self._client.send_json(
                f"/api/campaigns/{campaign_id}/status",
                method="PATCH",
                body={"status": status.value},
            )
            return validate_as(Campaign, result)

    async def get_stats(self, campaign_id: str) -> CampaignWithStats:
        async with self._track("Failed to fetch campaign statistics"):
            data = await self._client.send_json(f"/api/campaigns/{campaign_id}/stats")
            return validate_as(CampaignWithStats, data)

    async def delete_campaign(self, campaign_id: str) -> None:
        async with self._track("Failed to delete campaign"):
            await self._client.send(f"/api/campaigns/{campaign_id}", method="DELETE")
