import asyncio
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Literal

from .types import Listener, ListenerEntry, ListenerFilter, LogEvent

logger = logging.getLogger(__name__)

type MatchPolicy = Literal["any", "all"]


def matches(entry: ListenerEntry, event: LogEvent, policy: MatchPolicy = "any") -> bool:
    """
    Check whether a listener is interested in an event.

    "any": group equals OR severity reaches min_level.
    "all": every criterion the filter sets must hold.
    A filter without criteria matches everything under both policies.
    """
    flt = entry.filter
    if flt.is_empty:
        return True

    checks = []
    if flt.group is not None:
        checks.append(flt.group == event.group)
    if flt.min_level is not None:
        checks.append(event.level >= flt.min_level)

    return any(checks) if policy == "any" else all(checks)


class ListenerRegistry:
    """
    Ordered listener registrations with deferred dispatch.

    Callbacks never run inside `notify`. Each matching callback becomes its
    own zero-delay callback on the asyncio loop, issued in registration
    order, so one append's deliveries always run before the next append's.
    Without any loop, deliveries go in the same order to a single worker
    thread, started on first use.
    """

    def __init__(
        self,
        policy: MatchPolicy = "any",
        loop: asyncio.AbstractEventLoop | None = None,
    ):
        if policy not in ("any", "all"):
            raise ValueError(f"Unknown match policy {policy!r}")
        self.policy: MatchPolicy = policy
        self._entries: list[ListenerEntry] = []
        self._loop = loop
        self._worker: ThreadPoolExecutor | None = None
        self._lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[ListenerEntry, ...]:
        return tuple(self._entries)

    def register(self, flt: ListenerFilter, callback: Listener) -> ListenerEntry:
        entry = ListenerEntry(flt, callback)
        with self._lock:
            self._entries.append(entry)
        return entry

    def unregister(self, callback: Listener) -> int:
        """Remove every registration of `callback`. Returns how many were removed."""
        with self._lock:
            kept = [e for e in self._entries if e.callback != callback]
            removed = len(self._entries) - len(kept)
            self._entries = kept
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries = []

    def notify(self, event: LogEvent) -> int:
        """Schedule every matching callback for `event`. Returns how many were scheduled."""
        with self._lock:
            targets = [
                e.callback for e in self._entries if matches(e, event, self.policy)
            ]
            if not targets:
                return 0

            schedule = self._scheduler()
            for callback in targets:
                schedule(callback, event)

        return len(targets)

    def _scheduler(self) -> Callable[..., Any]:
        try:
            return asyncio.get_running_loop().call_soon
        except RuntimeError:
            pass

        if self._loop is not None and not self._loop.is_closed():
            return self._loop.call_soon_threadsafe

        if self._worker is None:
            self._worker = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="chronicler-listeners"
            )
        worker = self._worker
        return lambda callback, event: worker.submit(_deliver, callback, event)

    def drain(self, timeout: float | None = None) -> None:
        """Block until every delivery handed to the worker thread has run."""
        with self._lock:
            worker = self._worker
        if worker is not None:
            # Single worker, so this runs after everything queued before it
            worker.submit(_noop).result(timeout)

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker thread. A later delivery starts a new one."""
        with self._lock:
            worker, self._worker = self._worker, None
        if worker is not None:
            worker.shutdown(wait=wait)


def _deliver(callback: Listener, event: LogEvent) -> None:
    # Same reporting as asyncio's default handler for failing loop callbacks
    try:
        callback(event)
    except Exception:
        logger.exception("Listener %r failed for event %s", callback, event.key)


def _noop() -> None:
    pass
