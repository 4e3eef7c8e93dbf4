from typing import Any, Callable, Mapping, Protocol

from chronicler.types import Row, Severity


class ConsoleSink(Protocol):
    """Protocol for console-like output destinations.

    `table` is optional; without it group reports fall back to one `log`
    call per row.
    """

    def log(self, message: str, style: str, data: Any) -> None: ...

    def warn(self, message: str, style: str, data: Any) -> None: ...

    def error(self, message: str, style: str, data: Any) -> None: ...


class TableSink(ConsoleSink, Protocol):
    def table(self, rows: list[Row]) -> None: ...


def style_for(colors: Mapping[str, str], level: Severity) -> str:
    """Rich style string for a severity, e.g. "#ffffff on #5677fc"."""
    fg = colors.get("FONT", "")
    bg = colors.get(level.name, "")
    if fg and bg:
        return f"{fg} on {bg}"
    return fg or (f"on {bg}" if bg else "")


def emitter(sink: ConsoleSink, level: Severity) -> Callable[[str, str, Any], None]:
    """The sink method matching a severity."""
    return {
        Severity.LOG: sink.log,
        Severity.WARN: sink.warn,
        Severity.ERROR: sink.error,
    }[level]
