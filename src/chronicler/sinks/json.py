import json
import sys
from typing import Any, TextIO

from chronicler.types import Row, Severity


def json_dumps(record: dict[str, Any]) -> str:
    return json.dumps(
        record, default=_default, separators=(",", ":"), ensure_ascii=False
    )


def _default(value: Any) -> Any:
    if isinstance(value, Severity):
        return value.name
    return str(value)


class JsonSink:
    """Newline-delimited JSON output, one object per emission or report row."""

    def __init__(self, stream: TextIO | None = None):
        self.stream = stream

    def log(self, message: str, style: str, data: Any) -> None:
        self._write({"level": "LOG", "message": message, "data": data})

    def warn(self, message: str, style: str, data: Any) -> None:
        self._write({"level": "WARN", "message": message, "data": data})

    def error(self, message: str, style: str, data: Any) -> None:
        self._write({"level": "ERROR", "message": message, "data": data})

    def table(self, rows: list[Row]) -> None:
        stream = self.stream or sys.stdout
        # Severity is an int subclass, so json would keep it numeric
        stream.writelines(
            json_dumps({**row, "Level": _default(row["Level"])}) + "\n" for row in rows
        )
        stream.flush()

    def _write(self, record: dict[str, Any]) -> None:
        stream = self.stream or sys.stdout
        stream.write(json_dumps(record) + "\n")
        stream.flush()
