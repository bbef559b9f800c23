"""Auth commands -- log in, register, inspect and end the session.

Provides the ``sendwave auth`` sub-command group. The session token is
kept in the data directory (see :class:`~sendwave.auth.FileTokenStore`)
and attached to every later command.

Typical workflow::

    sendwave auth login --email ana@example.com
    sendwave auth whoami
    sendwave auth logout
"""

from __future__ import annotations

import typer

from sendwave.auth.session import AuthApi
from sendwave.client.request_client import RequestClient
from sendwave.commands._common import run_api, token_store
from sendwave.exit_codes import EXIT_AUTH_FAILURE
from sendwave.models import AuthSession, User
from sendwave.output import get_output, info, success, suggest


auth_app = typer.Typer(no_args_is_help=True)


@auth_app.command("login")
def auth_login(
    ctx: typer.Context,
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email."),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, help="Account password."
    ),
) -> None:
    """Log in and store the session token.

    Example::

        sendwave auth login --email ana@example.com
    """

    async def _login(client: RequestClient) -> AuthSession:
        return await AuthApi(client).login(email, password)

    session = run_api(ctx, _login)
    success(f"Logged in as {session.user.name} <{session.user.email}>.")


@auth_app.command("register")
def auth_register(
    ctx: typer.Context,
    name: str = typer.Option(..., "--name", prompt=True, help="Display name."),
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Account email."),
    password: str = typer.Option(
        ...,
        "--password",
        prompt=True,
        hide_input=True,
        confirmation_prompt=True,
        help="Account password.",
    ),
) -> None:
    """Create an account and start a session with it."""

    async def _register(client: RequestClient) -> AuthSession:
        return await AuthApi(client).register(email, password, name)

    session = run_api(ctx, _register)
    success(f"Account created for {session.user.email}.")


@auth_app.command("logout")
def auth_logout(ctx: typer.Context) -> None:
    """Forget the stored session token."""
    token_store(ctx).clear_token()
    success("Logged out.")


@auth_app.command("whoami")
def auth_whoami(ctx: typer.Context) -> None:
    """Show the user the stored token belongs to."""

    async def _me(client: RequestClient) -> User:
        return await AuthApi(client).me()

    user = run_api(ctx, _me)
    get_output().format_response(user)


@auth_app.command("status")
def auth_status(ctx: typer.Context) -> None:
    """Check the stored session; a rejected token is cleared.

    Exits with code 3 when there is no valid session.
    """

    async def _restore(client: RequestClient) -> User | None:
        return await AuthApi(client).restore()

    user = run_api(ctx, _restore)
    if user is None:
        info("Not logged in.")
        suggest("Log in: sendwave auth login")
        raise typer.Exit(code=EXIT_AUTH_FAILURE)
    success(f"Logged in as {user.name} <{user.email}>.")
