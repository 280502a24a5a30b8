# smaqc/db/port.py
"""Row-at-a-time query access used by every metric.

Metrics never touch SQLAlchemy directly. They set a query, open a reader and
pull rows as ``dict[str, str]`` keyed by the requested columns, which keeps
them independent of the backing store.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from sqlalchemy import text
from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import SQLAlchemyError

from smaqc.errors import DataAccessError
from smaqc.logging import get_logger

logger = get_logger(__file__)


class DataAccessPort(Protocol):
    def set_query(self, query: str, params: Mapping[str, Any] | None = None) -> None:
        ...

    def init_reader(self) -> None:
        ...

    def read_row(self, columns: Sequence[str]) -> tuple[bool, dict[str, str]]:
        ...

    def read_single_row(self, columns: Sequence[str]) -> tuple[bool, dict[str, str]]:
        ...


def render_value(value: Any) -> str:
    """Render a column value the way metrics expect it; NULL becomes ``""``."""

    if value is None:
        return ""
    return str(value)


class SQLAlchemyPort:
    """:class:`DataAccessPort` backed by a SQLAlchemy engine.

    Parameters
    ----------
    engine:
        Engine the queries run against. One connection is held while a
        reader is open and released when the rows are exhausted, when
        :meth:`read_single_row` returns or when a new query is set.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self._query: str | None = None
        self._params: dict[str, Any] = {}
        self._conn: Connection | None = None
        self._result: CursorResult | None = None
        self._keys: set[str] = set()

    def set_query(self, query: str, params: Mapping[str, Any] | None = None) -> None:
        self.close()
        self._query = query
        self._params = dict(params or {})

    def init_reader(self) -> None:
        if self._query is None:
            raise DataAccessError("init_reader called before set_query")
        self.close()
        try:
            self._conn = self.engine.connect()
            self._result = self._conn.execute(text(self._query), self._params)
        except SQLAlchemyError as exc:
            self.close()
            raise DataAccessError(f"query failed: {exc}") from exc
        self._keys = set(self._result.keys())

    def read_row(self, columns: Sequence[str]) -> tuple[bool, dict[str, str]]:
        if self._result is None:
            return False, {}
        try:
            row = self._result.fetchone()
        except SQLAlchemyError as exc:
            self.close()
            raise DataAccessError(f"fetch failed: {exc}") from exc
        if row is None:
            self.close()
            return False, {}

        missing = [column for column in columns if column not in self._keys]
        if missing:
            self.close()
            raise DataAccessError(f"query did not produce column(s): {', '.join(missing)}")

        mapping = row._mapping
        return True, {column: render_value(mapping[column]) for column in columns}

    def read_single_row(self, columns: Sequence[str]) -> tuple[bool, dict[str, str]]:
        if self._result is None:
            self.init_reader()
        try:
            return self.read_row(columns)
        finally:
            self.close()

    def close(self) -> None:
        if self._result is not None:
            self._result.close()
            self._result = None
        if self._conn is not None:
            self._conn.close()
            self._conn = None
        self._keys = set()
