"""sendwave -- client-side data access for the campaign messaging API.

The package wraps the server's JSON API behind a small async request
client and a set of resource objects, and ships a Typer CLI on top of
them.

Typical usage::

    from sendwave.auth import FileTokenStore
    from sendwave.client import RequestClient
    from sendwave.config import resolve_settings
    from sendwave.resources import CampaignsResource

    async with RequestClient(resolve_settings(), FileTokenStore()) as client:
        campaigns = await CampaignsResource(client).list_campaigns()

Modules:
    app: Typer application and CLI entry point.
    client: The request client and response interpretation.
    auth: Token storage and session helpers.
    resources: Campaign and contact operations with request state.
    models: Pydantic models shared across the package.
    config: Settings resolution and XDG-aware directories.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
    log: Diagnostic logging setup.
"""

__version__ = "0.1.0"
