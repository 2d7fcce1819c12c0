import logging
from collections.abc import Mapping
from numbers import Number


class TruncatingFilter(logging.Filter):
    """Shortens oversized log arguments such as full LinkParameters snapshots.

    Numbers pass through untouched so numeric format specifiers keep working.
    """

    def __init__(self, name: str = "", max_length: int = 250):
        super().__init__(name)
        self.max_length = max_length

    def _shorten(self, value):
        if isinstance(value, Number):
            return value
        text = str(value)
        if len(text) <= self.max_length:
            return value
        return text[: self.max_length] + "..."

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.args, Mapping):
            record.args = {key: self._shorten(val) for key, val in record.args.items()}
        elif record.args:
            record.args = tuple(self._shorten(arg) for arg in record.args)
        elif isinstance(record.msg, str):
            record.msg = self._shorten(record.msg)
        return True
