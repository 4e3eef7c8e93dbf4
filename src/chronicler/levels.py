from .types import Severity


def coerce_severity(value: Severity | int | str) -> Severity:
    """Accept a Severity, its numeric value or its (case-insensitive) name."""
    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity[value.upper()]
        except KeyError:
            raise ValueError(f"Unknown severity {value!r}") from None
    return Severity(value)


class LevelFilter:
    """Decides which severities reach the console sink."""

    __slots__ = ("_threshold",)

    def __init__(self, threshold: Severity | int | str = Severity.LOG):
        self._threshold = coerce_severity(threshold)

    @property
    def threshold(self) -> Severity:
        return self._threshold

    @threshold.setter
    def threshold(self, value: Severity | int | str) -> None:
        self._threshold = coerce_severity(value)

    def allows(self, level: Severity) -> bool:
        # Compared against the event's own severity, so NONE silences everything
        return self._threshold <= level
