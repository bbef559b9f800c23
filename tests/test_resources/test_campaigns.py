"""Tests for CampaignsResource."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from sendwave.client.request_client import RequestClient
from sendwave.exceptions import HTTPStatusError, ResponseParseError
from sendwave.models import CampaignStatus, CreateCampaignData
from sendwave.resources.campaigns import CampaignsResource

MakeClient = Callable[..., RequestClient]

CAMPAIGN: dict[str, Any] = {
    "id": "abc",
    "user_id": "u1",
    "name": "Black Friday",
    "connection_id": "c1",
    "list_id": "l1",
    "message_id": "m1",
    "status": "pending",
    "scheduled_at": None,
    "min_delay": 5,
    "max_delay": 15,
    "sent_count": 0,
    "failed_count": 0,
    "created_at": "2024-11-01T12:00:00.000Z",
    "updated_at": "2024-11-01T12:00:00.000Z",
}


def _recorder(response: httpx.Response, seen: list[httpx.Request]):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response

    return handler


class TestListCampaigns:
    @pytest.mark.asyncio
    async def test_returns_models(self, make_client: MakeClient) -> None:
        listed = dict(CAMPAIGN, list_name="VIP", message_name="Promo", connection_name="Main")
        seen: list[httpx.Request] = []

        async with make_client(_recorder(httpx.Response(200, json=[listed]), seen)) as client:
            campaigns = await CampaignsResource(client).list_campaigns()

        assert seen[0].method == "GET"
        assert seen[0].url.path == "/api/campaigns"
        assert len(campaigns) == 1
        assert campaigns[0].status is CampaignStatus.PENDING
        assert campaigns[0].list_name == "VIP"
        assert campaigns[0].created_at is not None

    @pytest.mark.asyncio
    async def test_failure_sets_error(self, make_client: MakeClient) -> None:
        handler = lambda r: httpx.Response(500, json={"error": "Erro ao buscar campanhas"})  # noqa: E731

        async with make_client(handler) as client:
            resource = CampaignsResource(client)
            with pytest.raises(HTTPStatusError):
                await resource.list_campaigns()

        assert resource.error == "Erro ao buscar campanhas"
        assert resource.loading is False

    @pytest.mark.asyncio
    async def test_html_response_is_parse_error(self, make_client: MakeClient) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, headers={"content-type": "text/html"}, text="<!DOCTYPE html><html></html>"
            )

        async with make_client(handler) as client:
            resource = CampaignsResource(client)
            with pytest.raises(ResponseParseError):
                await resource.list_campaigns()

        assert resource.error is not None


class TestCreateCampaign:
    @pytest.mark.asyncio
    async def test_posts_body_without_unset_fields(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []
        data = CreateCampaignData(name="X", connection_id="c1", list_id="l1", message_id="m1")

        async with make_client(_recorder(httpx.Response(201, json=CAMPAIGN), seen)) as client:
            campaign = await CampaignsResource(client).create_campaign(data)

        assert seen[0].method == "POST"
        assert seen[0].url.path == "/api/campaigns"
        assert json.loads(seen[0].content) == {
            "name": "X",
            "connection_id": "c1",
            "list_id": "l1",
            "message_id": "m1",
        }
        assert campaign.id == "abc"

    @pytest.mark.asyncio
    async def test_optional_fields_are_sent(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []
        data = CreateCampaignData(
            name="X",
            connection_id="c1",
            list_id="l1",
            message_id="m1",
            scheduled_at="2024-12-01T09:00:00Z",
            min_delay=3,
            max_delay=9,
        )

        async with make_client(_recorder(httpx.Response(201, json=CAMPAIGN), seen)) as client:
            await CampaignsResource(client).create_campaign(data)

        body = json.loads(seen[0].content)
        assert body["scheduled_at"] == "2024-12-01T09:00:00Z"
        assert (body["min_delay"], body["max_delay"]) == (3, 9)

    @pytest.mark.asyncio
    async def test_validation_error_message(self, make_client: MakeClient) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(400, json={"error": "Dados inválidos", "details": "list_id"})

        data = CreateCampaignData(name="X", connection_id="c1", list_id="", message_id="m1")
        async with make_client(handler) as client:
            resource = CampaignsResource(client)
            with pytest.raises(HTTPStatusError):
                await resource.create_campaign(data)

        assert resource.error == "Dados inválidos: list_id"


class TestUpdateStatus:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [CampaignStatus.PAUSED, "paused"])
    async def test_patches_status(self, make_client: MakeClient, status: Any) -> None:
        seen: list[httpx.Request] = []
        response = httpx.Response(200, json=dict(CAMPAIGN, status="paused"))

        async with make_client(_recorder(response, seen)) as client:
            campaign = await CampaignsResource(client).update_status("abc", status)

        assert seen[0].method == "PATCH"
        assert seen[0].url.path == "/api/campaigns/abc/status"
        assert json.loads(seen[0].content) == {"status": "paused"}
        assert campaign.status is CampaignStatus.PAUSED

    @pytest.mark.asyncio
    async def test_unknown_status_rejected_before_request(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        async with make_client(_recorder(httpx.Response(200, json=CAMPAIGN), seen)) as client:
            resource = CampaignsResource(client)
            with pytest.raises(ValueError):
                await resource.update_status("abc", "exploded")

        assert seen == []
        assert resource.error is None


class TestStatsAndDelete:
    @pytest.mark.asyncio
    async def test_get_stats(self, make_client: MakeClient) -> None:
        payload = {
            "campaign": dict(CAMPAIGN, status="running", sent_count=40, failed_count=2),
            "stats": {"total": 100, "sent": 40, "failed": 2, "pending": 58},
        }
        seen: list[httpx.Request] = []

        async with make_client(_recorder(httpx.Response(200, json=payload), seen)) as client:
            result = await CampaignsResource(client).get_stats("abc")

        assert seen[0].url.path == "/api/campaigns/abc/stats"
        assert result.campaign.sent_count == 40
        assert result.stats.pending == 58

    @pytest.mark.asyncio
    async def test_delete(self, make_client: MakeClient) -> None:
        seen: list[httpx.Request] = []

        async with make_client(_recorder(httpx.Response(204), seen)) as client:
            resource = CampaignsResource(client)
            assert await resource.delete_campaign("abc") is None

        assert seen[0].method == "DELETE"
        assert seen[0].url.path == "/api/campaigns/abc"
        assert resource.error is None

    @pytest.mark.asyncio
    async def test_delete_with_json_ack(self, make_client: MakeClient) -> None:
        response = httpx.Response(200, json={"message": "Campanha removida"})
        async with make_client(_recorder(response, [])) as client:
            await CampaignsResource(client).delete_campaign("abc")

    @pytest.mark.asyncio
    async def test_delete_not_found(self, make_client: MakeClient) -> None:
        handler = lambda r: httpx.Response(404, json={"error": "not found"})  # noqa: E731

        async with make_client(handler) as client:
            resource = CampaignsResource(client)
            with pytest.raises(HTTPStatusError) as exc_info:
                await resource.delete_campaign("missing")

        assert exc_info.value.is_not_found
        assert resource.error == "not found"
