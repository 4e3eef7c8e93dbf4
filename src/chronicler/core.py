import asyncio
import time
from typing import Any, Callable, Mapping

from .keys import format_key, parse_key
from .levels import LevelFilter, coerce_severity
from .listeners import ListenerRegistry, MatchPolicy
from .report import render, report
from .sinks import ConsoleSink, RichSink, emitter, style_for
from .store import EventStore
from .timefmt import format_elapsed
from .types import DEFAULT_COLORS, Listener, ListenerFilter, LogEvent, Row, Severity


def perf_clock() -> float:
    """Monotonic high-resolution clock in fractional milliseconds."""
    return time.perf_counter() * 1000


class Chronicler:
    """
    Chronicler records events, mirrors them to a console sink,
    keeps them for lookup and tells interested listeners about them.

    Instances share nothing; `chronicler.chronicle` is the default one.
    """

    levels = Severity
    default_colors = DEFAULT_COLORS

    def __init__(
        self,
        *,
        sink: ConsoleSink | None = None,
        level: Severity | int | str = Severity.LOG,
        colors: Mapping[str, str] | None = None,
        clock: Callable[[], float] | None = None,
        match: MatchPolicy = "any",
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        self.sink = sink if sink is not None else RichSink()
        self.colors = dict(colors if colors is not None else DEFAULT_COLORS)
        self.clock = clock or perf_clock
        self.store = EventStore()
        self.listeners = ListenerRegistry(match, loop)
        self._filter = LevelFilter(level)

    @property
    def level(self) -> Severity:
        """Minimum severity mirrored to the sink. Events are stored regardless."""
        return self._filter.threshold

    @level.setter
    def level(self, value: Severity | int | str) -> None:
        self._filter.threshold = value

    def log(self, id: str, data: Any = None, *, group: str | None = None) -> LogEvent:
        return self._add(Severity.LOG, id, data, group)

    def warn(self, id: str, data: Any = None, *, group: str | None = None) -> LogEvent:
        return self._add(Severity.WARN, id, data, group)

    def error(self, id: str, data: Any = None, *, group: str | None = None) -> LogEvent:
        return self._add(Severity.ERROR, id, data, group)

    def _add(self, level: Severity, key: str, data: Any, group: str | None) -> LogEvent:
        group_name, event_id = parse_key(key, group)
        event = LogEvent(
            id=event_id,
            group=group_name,
            data=data,
            level=level,
            time=self.clock(),
        )

        # Collision diagnostics come back from the store and follow the same path
        for stored in self.store.append(event):
            self.listeners.notify(stored)
            self._emit(stored)

        return event

    def _emit(self, event: LogEvent) -> None:
        if not self._filter.allows(event.level):
            return
        message = f"{format_key(event.group, event.id)}({format_elapsed(event.time)})"
        emitter(self.sink, event.level)(
            message, style_for(self.colors, event.level), event.data
        )

    def get_log(self, key: str) -> LogEvent:
        return self.store.get(key)

    def get_difference(self, first: str, second: str) -> str:
        """Formatted absolute time between two events."""
        delta = self.get_log(first).time - self.get_log(second).time
        return format_elapsed(abs(delta))

    def show_group(self, group: str) -> list[Row]:
        """Render a group's timing table to the sink and return its rows."""
        rows = report(self.store.group(group))
        render(self.sink, rows)
        return rows

    def listen(
        self,
        callback: Listener | None = None,
        *,
        group: str | None = None,
        min_level: Severity | int | str | None = None,
    ) -> Listener | Callable[[Listener], Listener]:
        """
        Register a callback for matching events. Works as a decorator too:

            @chronicle.listen(group="db")
            def on_db(event): ...
        """
        flt = ListenerFilter(
            group=group,
            min_level=None if min_level is None else coerce_severity(min_level),
        )

        if callback is None:
            def decorator(fn: Listener) -> Listener:
                self.listeners.register(flt, fn)
                return fn

            return decorator

        self.listeners.register(flt, callback)
        return callback

    def unlisten(self, callback: Listener) -> int:
        return self.listeners.unregister(callback)

    def history(self) -> tuple[LogEvent, ...]:
        return self.store.history()

    def drain(self, timeout: float | None = None) -> None:
        """Wait for listener calls made without an event loop to finish."""
        self.listeners.drain(timeout)

    def close(self) -> None:
        """Finish pending listener calls and stop the listener worker thread."""
        self.listeners.shutdown()

    def clear_all(self) -> None:
        """Forget every stored event. Listener registrations are kept."""
        self.store.clear()
