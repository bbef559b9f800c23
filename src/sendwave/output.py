"""Terminal rendering of command results.

Results (campaigns, contact lists, contacts, the current user, raw API
bodies) go to stdout. Status lines, errors and next-step hints go to
stderr, so ``sendwave --json campaigns list | jq`` only ever sees data.

The rendering is picked once per invocation from the global flags:

* ``json`` -- the result with the API's own field names, for scripts.
* ``plain`` -- tab-separated lines for ``cut`` and ``awk``.
* ``rich`` -- tables and highlighted JSON; the default on a terminal.

Colour is off under ``NO_COLOR``, ``TERM=dumb`` or ``--no-color``
(see https://clig.dev/#output).

Commands pass their results as they come back from the resources::

    output = get_output()
    output.print_table(CAMPAIGN_COLUMNS, campaigns, title="Campaigns",
                       empty="No campaigns.")
"""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Sequence

from pydantic import BaseModel
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from sendwave.client.response import JsonBody, RawBody


class OutputFormat(str, Enum):
    """How results are written to stdout.

    ``AUTO`` becomes ``RICH`` on an interactive terminal with colour
    enabled and ``PLAIN`` everywhere else.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


@dataclass(frozen=True)
class Column:
    """A table column: its header and how to read the cell from a record."""

    header: str
    value: Callable[[Any], Any]

    def cell(self, record: Any) -> str:
        value = self.value(record)
        if value is None or value == "":
            return "-"
        if isinstance(value, Enum):
            return str(value.value)
        return str(value)


def to_jsonable(data: Any) -> Any:
    """Turn a command result into plain JSON values.

    Models are dumped in JSON mode, so datetimes become ISO strings and
    enums their values. A :class:`JsonBody` unwraps to its value and a
    :class:`RawBody` to its text.
    """
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, JsonBody):
        return data.value
    if isinstance(data, RawBody):
        return data.text
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(value) for key, value in data.items()}
    return data


class OutputManager:
    """Writes results to stdout and diagnostics to stderr.

    Args:
        format: Result rendering; ``AUTO`` resolves from TTY detection.
        no_color: Disable colour and styling.
        quiet: Drop info, success and suggestion lines. Errors and
            results are always written.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        if format == OutputFormat.AUTO:
            format = OutputFormat.RICH if _is_tty() and not self._no_color else OutputFormat.PLAIN
        self._format = format
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=format == OutputFormat.RICH,
            highlight=False,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, highlight=False)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # ------------------------------------------------------------------ #
    # Results (stdout)
    # ------------------------------------------------------------------ #

    def format_response(self, data: Any) -> None:
        """Write one result: a model, a list of models, a parsed API body or plain data.

        A :class:`RawBody` is written verbatim in every format.
        """
        if isinstance(data, RawBody):
            self._write(data.text)
            return

        payload = to_jsonable(data)
        if self._format == OutputFormat.JSON:
            self._write(json.dumps(payload, indent=2, ensure_ascii=False))
        elif self._format == OutputFormat.PLAIN:
            for line in _plain_lines(payload):
                self._write(line)
        elif isinstance(payload, (dict, list)):
            text = json.dumps(payload, indent=2, ensure_ascii=False)
            self._stdout.print(Syntax(text, "json", theme="monokai", word_wrap=True))
        else:
            self._stdout.print(Text(str(payload)))

    def print_table(
        self,
        columns: Sequence[Column],
        records: Sequence[Any],
        title: Optional[str] = None,
        empty: str = "Nothing to show.",
    ) -> None:
        """Write *records* (models or dicts) as a table.

        JSON output carries the full records rather than the selected
        columns. An empty result prints *empty* as an info line in the
        other formats.
        """
        if self._format == OutputFormat.JSON:
            self.format_response(list(records))
            return
        if not records:
            self.info(empty)
            return

        headers = [column.header for column in columns]
        rows = [[column.cell(record) for column in columns] for record in records]
        if self._format == OutputFormat.PLAIN:
            self._write("\t".join(headers))
            for row in rows:
                self._write("\t".join(row))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*(Text(cell) for cell in row))
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def info(self, message: str) -> None:
        self._diagnostic(message)

    def success(self, message: str) -> None:
        self._diagnostic(message, style="green")

    def suggest(self, message: str) -> None:
        """Print a next step, e.g. the command that fixes an expired session."""
        self._diagnostic(f"→ {message}", style="dim")

    def error(self, message: str) -> None:
        """Print an error. Never suppressed by ``--quiet``."""
        self._diagnostic(f"Error: {message}", style="bold red", always=True)

    def _diagnostic(self, text: str, style: Optional[str] = None, always: bool = False) -> None:
        if self._quiet and not always:
            return
        if style is None or self._no_color:
            print(text, file=sys.stderr, flush=True)
        else:
            self._stderr.print(Text(text, style=style), soft_wrap=True)

    def _write(self, line: str) -> None:
        print(line, file=sys.stdout, flush=True)


def _plain_value(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def _plain_lines(payload: Any) -> list[str]:
    """One ``key<TAB>value`` line per field, or one line per list item."""
    if isinstance(payload, dict):
        return [f"{key}\t{_plain_value(value)}" for key, value in payload.items()]
    if isinstance(payload, list):
        return [
            "\t".join(_plain_value(v) for v in item.values()) if isinstance(item, dict) else _plain_value(item)
            for item in payload
        ]
    return [_plain_value(payload)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    return os.environ.get("NO_COLOR") is not None or os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the global :class:`OutputManager`, creating a default one lazily."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Drop the global instance; it holds on to the streams it was built with."""
    global _output
    _output = None


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)
