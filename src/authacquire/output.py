"""Terminal output for the authacquire CLI.

The acquired credential (and any table or JSON the CLI prints) is the only
thing written to stdout, so ``$(authacquire token)`` captures exactly the
header value. Status lines, warnings and errors go to stderr.

Rich rendering is used when stdout is a colour terminal; piped output is
plain text. ``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` disable colour.

:func:`~authacquire.app.main_callback` installs one :class:`OutputManager`
with :func:`set_output`; the module-level helpers delegate to it.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table


class OutputFormat(str, Enum):
    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Writes data to stdout and diagnostics to stderr.

    Args:
        format: ``AUTO`` picks ``RICH`` on a colour terminal and ``PLAIN``
            otherwise.
        no_color: Disable colour and Rich markup.
        quiet: Drop info, success and suggestion lines.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._format = self._resolve_format(format)
        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    def _resolve_format(self, requested: OutputFormat) -> OutputFormat:
        if requested != OutputFormat.AUTO:
            return requested
        if _is_tty() and not self._no_color:
            return OutputFormat.RICH
        return OutputFormat.PLAIN

    @property
    def format(self) -> OutputFormat:
        return self._format

    @property
    def stderr_console(self) -> Console:
        """Console the CLI's ``RichHandler`` logs through."""
        return self._stderr

    # ------------------------------------------------------------------ #
    # Data (stdout)
    # ------------------------------------------------------------------ #

    def print_data(self, text: str) -> None:
        """Write *text* verbatim; credentials must never pass through Rich markup."""
        print(text, file=sys.stdout, flush=True)

    def format_response(self, data: Any) -> None:
        """Write a JSON-serialisable value: JSON, ``key<TAB>value`` lines, or highlighted JSON."""
        if self._format == OutputFormat.PLAIN:
            self._print_plain(data)
            return
        rendered = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if self._format == OutputFormat.JSON:
            self.print_data(rendered)
        else:
            self._stdout.print(Syntax(rendered, "json", word_wrap=True))

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Write rows as a list of JSON objects, TSV, or a Rich table."""
        if self._format == OutputFormat.JSON:
            records = [dict(zip(headers, row)) for row in rows]
            self.print_data(json.dumps(records, indent=2, ensure_ascii=False))
            return
        if self._format == OutputFormat.PLAIN:
            for line in [headers, *rows]:
                self.print_data("\t".join(line))
            return
        table = Table(*headers, title=title, header_style="bold cyan")
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # ------------------------------------------------------------------ #
    # Diagnostics (stderr)
    # ------------------------------------------------------------------ #

    def _diagnostic(self, message: str, label: str = "", style: str = "") -> None:
        if self._no_color:
            print(f"{label}{message}", file=sys.stderr, flush=True)
        elif style:
            self._stderr.print(f"[{style}]{label}[/{style}]{message}")
        else:
            self._stderr.print(f"{label}{message}")

    def info(self, message: str) -> None:
        """Status line. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._diagnostic(message)

    def success(self, message: str) -> None:
        if not self._quiet:
            self._diagnostic("", label=message, style="green")

    def warning(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(message, label="Warning: ", style="yellow")

    def error(self, message: str) -> None:
        """Shown even with ``--quiet``."""
        self._diagnostic(message, label="Error: ", style="bold red")

    def suggest(self, message: str) -> None:
        """Next-step hint. Suppressed by ``--quiet``."""
        if not self._quiet:
            self._diagnostic("", label=f"→ {message}", style="dim")

    def debug(self, message: str) -> None:
        """Shown only with ``--verbose``."""
        if self._verbose:
            self._diagnostic("", label=f"[debug] {message}", style="dim")

    def _print_plain(self, data: Any) -> None:
        if isinstance(data, dict):
            for key, value in data.items():
                self.print_data(f"{key}\t{value}")
        elif isinstance(data, list):
            for item in data:
                self.print_data(str(item))
        else:
            self.print_data(str(data))


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (any value) or ``TERM=dumb``."""
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


# ------------------------------------------------------------------ #
# Global output instance (set during app startup)
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
    """Drop the global manager; used by the test suite between tests."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_data(text: str) -> None:
    get_output().print_data(text)


def print_table(
    headers: list[str],
    rows: list[list[str]],
    title: Optional[str] = None,
) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)
