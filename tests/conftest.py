from typing import Any

import pytest

from chronicler import Chronicler


class RecordingSink:
    """Keeps every call so tests can assert on console output."""

    def __init__(self):
        self.calls: list[tuple[str, str, str, Any]] = []
        self.tables: list[list[dict]] = []

    def log(self, message, style, data):
        self.calls.append(("log", message, style, data))

    def warn(self, message, style, data):
        self.calls.append(("warn", message, style, data))

    def error(self, message, style, data):
        self.calls.append(("error", message, style, data))

    def table(self, rows):
        self.tables.append(rows)


class FakeClock:
    """Returns the queued times in order, then keeps repeating the last one."""

    def __init__(self, *times: float):
        self.times = list(times) or [0.0]
        self.last = self.times[0]

    def set(self, *times: float) -> None:
        self.times = list(times)

    def __call__(self) -> float:
        if self.times:
            self.last = self.times.pop(0)
        return self.last


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def clock():
    return FakeClock(1414975166997.0)


@pytest.fixture
def chron(sink, clock):
    chron = Chronicler(sink=sink, clock=clock)
    yield chron
    chron.close()
