"""Built-in CLI sub-commands for sendwave.

* :mod:`~sendwave.commands.auth` -- log in, register, check the session.
* :mod:`~sendwave.commands.campaigns` -- create and control campaigns.
* :mod:`~sendwave.commands.contacts` -- manage contact lists and contacts.
* :mod:`~sendwave.commands.config` -- view and set the API URL.

Each module exports a :class:`typer.Typer` sub-application registered on
the root app in :mod:`sendwave.app`.
"""
