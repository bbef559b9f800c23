"""Helpers shared by the CLI command modules.

Commands read their collaborators from the Typer context object populated
by :func:`~sendwave.app.main_callback`:

* ``settings`` -- the resolved :class:`~sendwave.models.ClientSettings`.
* ``token_store`` -- a :class:`~sendwave.auth.TokenProvider`; defaults to
  the on-disk :class:`~sendwave.auth.FileTokenStore`.
* ``transport`` -- optional httpx transport, set by tests.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, TypeVar

import typer

from sendwave.auth.token_store import FileTokenStore, TokenProvider
from sendwave.client.request_client import RequestClient
from sendwave.exceptions import SendwaveError
from sendwave.models import ClientSettings
from sendwave.output import error, suggest

T = TypeVar("T")


def token_store(ctx: typer.Context) -> TokenProvider:
    obj = ctx.ensure_object(dict)
    store = obj.get("token_store")
    if store is None:
        store = FileTokenStore()
        obj["token_store"] = store
    return store


def open_client(ctx: typer.Context) -> RequestClient:
    """Build a request client for the current invocation (not yet opened)."""
    obj = ctx.ensure_object(dict)
    settings: ClientSettings = obj.get("settings") or ClientSettings()
    return RequestClient(settings, token_store(ctx), transport=obj.get("transport"))


def run_api(ctx: typer.Context, operation: Callable[[RequestClient], Awaitable[T]]) -> T:
    """Open a client, run *operation* with it, and map failures to exit codes.

    A :class:`~sendwave.exceptions.SendwaveError` is printed and turned into
    ``typer.Exit`` with the error's exit code.
    """

    async def _runner() -> T:
        async with open_client(ctx) as client:
            return await operation(client)

    try:
        return asyncio.run(_runner())
    except SendwaveError as exc:
        error(str(exc))
        if getattr(exc, "is_unauthorized", False):
            suggest("Log in again: sendwave auth login")
        raise typer.Exit(code=exc.exit_code) from None

