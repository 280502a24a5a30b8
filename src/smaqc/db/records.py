from __future__ import annotations

import math
from typing import Any, Callable, Iterable, Iterator


def parse_int(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return int(float(text))
    except (TypeError, ValueError, OverflowError):
        return None


def parse_float(value: Any) -> float | None:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        parsed = float(text)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


class RowDecoder:
    """Decode string rows into typed tuples, counting the rows that fail.

    ``fields`` maps each column to a parser (``parse_int`` or
    ``parse_float``). A row with any field that does not parse is skipped
    and counted in :attr:`skipped`.

    >>> decoder = RowDecoder({"Scan": parse_int, "ScanTime": parse_float})
    >>> list(decoder.decode([{"Scan": "3", "ScanTime": "1.5"}, {"Scan": "x", "ScanTime": ""}]))
    [(3, 1.5)]
    >>> decoder.skipped
    1
    """

    def __init__(self, fields: dict[str, Callable[[Any], Any]]):
        self.fields = fields
        self.skipped = 0

    def decode_row(self, row: dict[str, str]) -> tuple | None:
        values = []
        for column, parser in self.fields.items():
            value = parser(row.get(column))
            if value is None:
                self.skipped += 1
                return None
            values.append(value)
        return tuple(values)

    def decode(self, rows: Iterable[dict[str, str]]) -> Iterator[tuple]:
        for row in rows:
            decoded = self.decode_row(row)
            if decoded is not None:
                yield decoded
