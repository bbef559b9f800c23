"""Typer application and CLI entry point for sendwave.

This module wires together the top-level Typer application and registers
the built-in sub-command groups (``auth``, ``campaigns``, ``contacts``,
``config``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers and invokes the Typer app.
Unhandled exceptions are written to a crash log under the data directory.

See Also:
    :mod:`sendwave.config`: Settings resolution used in :func:`main_callback`.
    :mod:`sendwave.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from sendwave import __version__
from sendwave.commands.auth import auth_app
from sendwave.commands.campaigns import campaigns_app
from sendwave.commands.config import config_app
from sendwave.commands.contacts import contacts_app
from sendwave.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="sendwave",
    help="Manage messaging campaigns and contact lists from the terminal.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(auth_app, name="auth", help="Log in and manage the session.")
app.add_typer(campaigns_app, name="campaigns", help="Create and control campaigns.")
app.add_typer(contacts_app, name="contacts", help="Manage contact lists and contacts.")
app.add_typer(config_app, name="config", help="View and change configuration.")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"sendwave {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    api_url: Optional[str] = typer.Option(
        None, "--api-url", help="API base URL (overrides SENDWAVE_API_URL and config)."
    ),
    json_output: bool = typer.Option(
        False, "--json", help="JSON output format."
    ),
    plain_output: bool = typer.Option(
        False, "--plain", help="Plain text output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress non-essential output."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug output."
    ),
) -> None:
    """Root callback executed before every sub-command.

    Initialises the global :class:`~sendwave.output.OutputManager` and the
    diagnostic log handler from CLI flags, resolves the client settings
    (the ``config`` group resolves its own), and stores them in
    ``ctx.obj`` for the sub-commands.  Entries already present in
    ``ctx.obj`` (a token store or transport supplied by an
    embedding program or a test) are kept.
    """
    from sendwave.config import resolve_settings
    from sendwave.exceptions import ConfigError
    from sendwave.log import configure_logging
    from sendwave.output import OutputFormat, OutputManager, error, set_output

    fmt = OutputFormat.AUTO
    if json_output:
        fmt = OutputFormat.JSON
    elif plain_output:
        fmt = OutputFormat.PLAIN

    set_output(OutputManager(format=fmt, no_color=no_color, quiet=quiet))
    configure_logging(verbose=verbose, quiet=quiet, no_color=no_color)

    ctx.ensure_object(dict)
    ctx.obj["api_url_flag"] = api_url
    ctx.obj["verbose"] = verbose

    # The config group must stay usable with a broken config file.
    if ctx.invoked_subcommand == "config":
        return

    try:
        settings = resolve_settings(api_url)
    except ConfigError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
    ctx.obj["settings"] = settings


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from sendwave.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(traceback.format_exc())
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``sendwave`` console script.

    Unhandled :class:`~sendwave.exceptions.SendwaveError` instances cause a
    clean exit with the error's ``exit_code``. All other exceptions produce
    a crash log and a generic failure exit.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from sendwave.exceptions import SendwaveError
        from sendwave.output import error

        if isinstance(exc, SendwaveError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
