class ChroniclerError(Exception):
    """Base class for everything chronicler raises."""


class EventNotFound(ChroniclerError, KeyError):
    """Raised when a key, id or group is not in the store."""

    def __init__(self, key: str, reason: str | None = None):
        self.key = key
        self.reason = reason
        super().__init__(key)

    def __str__(self) -> str:
        if self.reason:
            return f"{self.reason}: {self.key!r}"
        return f"No event stored under {self.key!r}"


class MalformedKey(ChroniclerError, ValueError):
    """Raised for keys that cannot name an event (empty id, wrong type)."""
