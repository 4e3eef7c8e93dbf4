from typing import Iterable

from .sinks.base import ConsoleSink
from .timefmt import format_elapsed
from .types import LogEvent, Row


def report(events: Iterable[LogEvent]) -> list[Row]:
    """Build time-ordered rows with time since the first and the previous event."""
    ordered = sorted(events, key=lambda e: e.time)
    if not ordered:
        return []

    start = last = ordered[0].time
    rows: list[Row] = []
    for event in ordered:
        rows.append(
            {
                "ID": event.id,
                "Time": format_elapsed(event.time),
                "Time Since Start": format_elapsed(event.time - start),
                "Time Since Last": format_elapsed(event.time - last),
                "Data": event.data,
                "Level": event.level,
            }
        )
        last = event.time

    return rows


def render(sink: ConsoleSink, rows: list[Row]) -> None:
    """Hand rows to the sink's table renderer, or emit them one by one."""
    table = getattr(sink, "table", None)
    if callable(table):
        table(rows)
        return

    for row in rows:
        sink.log(str(row["ID"]), "", row)
