"""Diagnostic logging setup for the CLI.

Library modules log through ``logging.getLogger(__name__)`` and never
configure handlers themselves.  The CLI calls :func:`configure_logging`
once to route those records to stderr: through
:class:`rich.logging.RichHandler` on an interactive terminal, through a
plain timestamped :class:`logging.StreamHandler` otherwise so that
redirected output stays greppable.

Levels: WARNING by default, DEBUG with ``--verbose``, ERROR only with
``--quiet``.
"""

from __future__ import annotations

import logging
import sys

from rich.logging import RichHandler

_HANDLER_NAME = "sendwave-cli"


def configure_logging(verbose: bool = False, quiet: bool = False, no_color: bool = False) -> None:
    """Install the stderr handler on the ``sendwave`` logger.

    Calling it again replaces the previously installed handler, so repeated
    CLI invocations in one process (tests) do not stack handlers.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    if sys.stderr.isatty() and not no_color:
        handler: logging.Handler = RichHandler(show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)

    logger = logging.getLogger("sendwave")
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(level)


def reset_logging() -> None:
    """Remove the CLI handler and restore the ``sendwave`` logger defaults."""
    logger = logging.getLogger("sendwave")
    for existing in list(logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logger.removeHandler(existing)
    logger.setLevel(logging.NOTSET)
