from .core import Chronicler, perf_clock
from .errors import ChroniclerError, EventNotFound, MalformedKey
from .store import DIAGNOSTICS_GROUP
from .timefmt import format_elapsed
from .types import DEFAULT_COLORS, ListenerFilter, LogEvent, Row, Severity

# Process-wide default instance
chronicle = Chronicler()

__all__ = [
    "Chronicler",
    "ChroniclerError",
    "DEFAULT_COLORS",
    "DIAGNOSTICS_GROUP",
    "EventNotFound",
    "ListenerFilter",
    "LogEvent",
    "MalformedKey",
    "Row",
    "Severity",
    "chronicle",
    "format_elapsed",
    "perf_clock",
]
