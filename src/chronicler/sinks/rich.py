from typing import Any

from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table
from rich.text import Text

from chronicler.types import ROW_COLUMNS, Row, Severity


def level_color(level: Severity) -> str:
    return {
        Severity.LOG: "blue",
        Severity.WARN: "yellow",
        Severity.ERROR: "red",
    }.get(level, "white")


class RichSink:
    """Rich console output. Warnings and errors go to stderr."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def log(self, message: str, style: str, data: Any) -> None:
        self._print(self.console, message, style, data)

    def warn(self, message: str, style: str, data: Any) -> None:
        self._print(self.err_console, message, style, data)

    def error(self, message: str, style: str, data: Any) -> None:
        self._print(self.err_console, message, style, data)

    def _print(self, console: Console, message: str, style: str, data: Any) -> None:
        label = Text(message, style=style)
        if data is None:
            console.print(label)
            return
        # Strings print verbatim (no markup), everything else pretty printed
        console.print(label, Text(data) if isinstance(data, str) else Pretty(data))

    def table(self, rows: list[Row]) -> None:
        table = Table(show_lines=False, header_style="bold")
        for column in ROW_COLUMNS:
            table.add_column(column, justify="right" if column.startswith("Time") else "left")

        for row in rows:
            level = row["Level"]
            style = level_color(level) if isinstance(level, Severity) else "white"
            table.add_row(
                Text(str(row["ID"])),
                row["Time"],
                row["Time Since Start"],
                row["Time Since Last"],
                Pretty(row["Data"]),
                Text(level.name if isinstance(level, Severity) else str(level), style=style),
            )

        self.console.print(table)
