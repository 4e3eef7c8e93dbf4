from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

# Column names of a group report row, in display order
ROW_COLUMNS = ("ID", "Time", "Time Since Start", "Time Since Last", "Data", "Level")

type Row = dict[str, Any]


class Severity(IntEnum):
    LOG = 1
    WARN = 2
    ERROR = 3
    NONE = 4


@dataclass(frozen=True, slots=True)
class LogEvent:
    """A single stored event. `time` is in fractional milliseconds."""

    id: str
    group: str
    data: Any
    level: Severity
    time: float

    @property
    def key(self) -> str:
        return f"{self.group}:{self.id}" if self.group else self.id


type Listener = Callable[[LogEvent], Any]


@dataclass(frozen=True, slots=True)
class ListenerFilter:
    group: str | None = None
    min_level: Severity | None = None

    @property
    def is_empty(self) -> bool:
        return self.group is None and self.min_level is None


@dataclass(frozen=True, slots=True)
class ListenerEntry:
    filter: ListenerFilter
    callback: Listener


DEFAULT_COLORS: dict[str, str] = {
    "LOG": "#5677fc",
    "WARN": "#ff9800",
    "ERROR": "#e51c23",
    "FONT": "#ffffff",
}
