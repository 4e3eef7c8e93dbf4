from .base import ConsoleSink, TableSink, emitter, style_for
from .json import JsonSink
from .rich import RichSink

__all__ = ["ConsoleSink", "TableSink", "JsonSink", "RichSink", "emitter", "style_for"]
