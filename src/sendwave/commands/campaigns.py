"""Campaign commands -- the ``sendwave campaigns`` sub-command group.

Example::

    sendwave campaigns create --name Launch --connection c1 --list l1 --message m1
    sendwave campaigns set-status 3f2a running
    sendwave campaigns stats 3f2a
"""

from __future__ import annotations

from operator import attrgetter
from typing import Optional

import typer

from sendwave.client.request_client import RequestClient
from sendwave.commands._common import run_api
from sendwave.models import (
    Campaign,
    CampaignStatus,
    CampaignWithStats,
    CreateCampaignData,
)
from sendwave.output import Column, OutputFormat, get_output, success
from sendwave.resources.campaigns import CampaignsResource


campaigns_app = typer.Typer(no_args_is_help=True)


CAMPAIGN_COLUMNS = [
    Column("ID", attrgetter("id")),
    Column("NAME", attrgetter("name")),
    Column("STATUS", attrgetter("status")),
    Column("SENT", attrgetter("sent_count")),
    Column("FAILED", attrgetter("failed_count")),
    Column("LIST", lambda c: c.list_name or c.list_id),
]

STATS_COLUMNS = [
    Column("TOTAL", attrgetter("total")),
    Column("SENT", attrgetter("sent")),
    Column("FAILED", attrgetter("failed")),
    Column("PENDING", attrgetter("pending")),
]


@campaigns_app.command("list")
def campaigns_list(ctx: typer.Context) -> None:
    """List campaigns."""

    async def _list(client: RequestClient) -> list[Campaign]:
        return await CampaignsResource(client).list_campaigns()

    campaigns = run_api(ctx, _list)
    get_output().print_table(CAMPAIGN_COLUMNS, campaigns, title="Campaigns", empty="No campaigns.")


@campaigns_app.command("create")
def campaigns_create(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", help="Campaign name."),
    connection_id: str = typer.Option(..., "--connection", help="Sending connection id."),
    list_id: str = typer.Option(..., "--list", help="Contact list id."),
    message_id: str = typer.Option(..., "--message", help="Message template id."),
    scheduled_at: Optional[str] = typer.Option(
        None, "--scheduled-at", help="ISO 8601 start time; starts immediately when omitted."
    ),
    min_delay: Optional[int] = typer.Option(
        None, "--min-delay", help="Minimum seconds between messages."
    ),
    max_delay: Optional[int] = typer.Option(
        None, "--max-delay", help="Maximum seconds between messages."
    ),
) -> None:
    """Create a campaign sending one message to every contact of a list."""
    data = CreateCampaignData(
        name=name,
        connection_id=connection_id,
        list_id=list_id,
        message_id=message_id,
        scheduled_at=scheduled_at,
        min_delay=min_delay,
        max_delay=max_delay,
    )

    async def _create(client: RequestClient) -> Campaign:
        return await CampaignsResource(client).create_campaign(data)

    campaign = run_api(ctx, _create)
    success(f'Campaign "{campaign.name}" created ({campaign.id}).')
    get_output().format_response(campaign)


@campaigns_app.command("set-status")
def campaigns_set_status(
    ctx: typer.Context,
    campaign_id: str = typer.Argument(help="Campaign id."),
    status: CampaignStatus = typer.Argument(help="New status."),
) -> None:
    """Start, pause, resume or cancel a campaign."""

    async def _update(client: RequestClient) -> Campaign:
        return await CampaignsResource(client).update_status(campaign_id, status)

    campaign = run_api(ctx, _update)
    success(f'Campaign "{campaign.name}" is now {campaign.status.value}.')


@campaigns_app.command("stats")
def campaigns_stats(
    ctx: typer.Context,
    campaign_id: str = typer.Argument(help="Campaign id."),
) -> None:
    """Show delivery counters for a campaign."""

    async def _stats(client: RequestClient) -> CampaignWithStats:
        return await CampaignsResource(client).get_stats(campaign_id)

    result = run_api(ctx, _stats)
    output = get_output()
    if output.format == OutputFormat.JSON:
        output.format_response(result)
        return
    campaign = result.campaign
    output.print_table(
        STATS_COLUMNS, [result.stats], title=f"{campaign.name} ({campaign.status.value})"
    )


@campaigns_app.command("delete")
def campaigns_delete(
    ctx: typer.Context,
    campaign_id: str = typer.Argument(help="Campaign id."),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt."),
) -> None:
    """Delete a campaign."""
    if not yes:
        typer.confirm(f"Delete campaign {campaign_id}?", abort=True)

    async def _delete(client: RequestClient) -> None:
        await CampaignsResource(client).delete_campaign(campaign_id)

    run_api(ctx, _delete)
    success(f"Campaign {campaign_id} deleted.")
