import itertools
import threading

from .errors import EventNotFound, MalformedKey
from .keys import format_key, parse_key
from .types import LogEvent, Severity

DIAGNOSTICS_GROUP = "@@LoggerErrors@@"


class EventStore:
    """
    Append-only event log plus a per-group index of the latest event per id.

    The log keeps every event ever appended; the index is last-write-wins
    per (group, id). Colliding ids are not rejected, a diagnostic ERROR event
    is stored in `DIAGNOSTICS_GROUP` instead.
    """

    def __init__(self) -> None:
        self._log: list[LogEvent] = []
        self._groups: dict[str, dict[str, LogEvent]] = {}
        self._diagnostic_ids = itertools.count(1)
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._log)

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, str):
            return False
        try:
            self.get(key)
        except (EventNotFound, MalformedKey):
            return False
        return True

    def append(self, event: LogEvent) -> list[LogEvent]:
        """Store `event`. Returns every event stored by this call, in log order."""
        with self._lock:
            self._log.append(event)
            group = self._groups.setdefault(event.group, {})
            collided = event.id in group
            group[event.id] = event

            if not collided:
                return [event]

            return [event, *self.append(self._diagnostic_for(event))]

    def _diagnostic_for(self, event: LogEvent) -> LogEvent:
        message = f"ID `{event.id}` is already used"
        if event.group:
            message += f" in group `{event.group}`"

        return LogEvent(
            id=str(next(self._diagnostic_ids)),
            group=DIAGNOSTICS_GROUP,
            data=message + ".",
            level=Severity.ERROR,
            time=event.time,
        )

    def get(self, key: str) -> LogEvent:
        group_name, event_id = parse_key(key)
        with self._lock:
            group = self._groups.get(group_name)
            if group is None:
                raise EventNotFound(group_name, "Unknown group")
            try:
                return group[event_id]
            except KeyError:
                raise EventNotFound(format_key(group_name, event_id)) from None

    def group(self, name: str) -> list[LogEvent]:
        """Indexed events of a group, in insertion order."""
        with self._lock:
            events = list(self._groups.get(name, {}).values())
        if not events:
            raise EventNotFound(name, "Unknown or empty group")
        return events

    def history(self) -> tuple[LogEvent, ...]:
        with self._lock:
            return tuple(self._log)

    def clear(self) -> None:
        # Diagnostic ids keep counting so they stay unique for the process
        with self._lock:
            self._log = []
            self._groups = {}
