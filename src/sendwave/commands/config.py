"""Config commands -- view and modify the user configuration.

Example::

    sendwave config set-url https://api.example.com
    sendwave config show
"""

from __future__ import annotations

import os

import typer

from sendwave.auth.token_store import FileTokenStore
from sendwave.commands._common import token_store
from sendwave.config import API_URL_ENV, load_user_config, resolve_settings, save_api_url
from sendwave.exceptions import ConfigError
from sendwave.exit_codes import EXIT_INVALID_USAGE
from sendwave.output import error, get_output, success, suggest


config_app = typer.Typer(no_args_is_help=True)


@config_app.command("show")
def config_show(ctx: typer.Context) -> None:
    """Show the effective settings and where the base URL comes from."""
    obj = ctx.ensure_object(dict)
    try:
        settings = resolve_settings(obj.get("api_url_flag"))
    except ConfigError as exc:
        error(str(exc))
        suggest("Replace it with: sendwave config set-url <URL>")
        raise typer.Exit(code=exc.exit_code) from None

    if obj.get("api_url_flag") is not None:
        source = "--api-url"
    elif os.environ.get(API_URL_ENV):
        source = API_URL_ENV
    else:
        source = "config file" if load_user_config().api_url else "default"

    store = token_store(ctx)
    data = {
        "api_url": settings.base_url,
        "api_url_source": source,
        "timeout": settings.timeout,
        "verify_ssl": settings.verify_ssl,
        "logged_in": store.get_token() is not None,
    }
    if isinstance(store, FileTokenStore):
        data["session_file"] = str(store.path)
    get_output().format_response(data)


@config_app.command("set-url")
def config_set_url(
    api_url: str = typer.Argument(help="Base URL of the API, e.g. https://api.example.com"),
) -> None:
    """Store the default API base URL.

    An unreadable config file is replaced rather than reported, so this
    command also repairs it.
    """
    if not api_url.startswith(("http://", "https://")):
        error("The API URL must start with http:// or https://.")
        raise typer.Exit(code=EXIT_INVALID_USAGE)
    path = save_api_url(api_url)
    success(f"API URL saved to {path}.")
    if os.environ.get(API_URL_ENV):
        suggest(f"{API_URL_ENV} is set and takes precedence over the saved URL.")
