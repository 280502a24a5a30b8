from __future__ import annotations

from typing import Any, Callable, Sequence

from smaqc.db.port import DataAccessPort
from smaqc.db.records import RowDecoder
from smaqc.logging import get_logger
from smaqc.metrics.cache import ScratchCache
from smaqc.metrics.mode import IdentificationMode

logger = get_logger(__file__)


class MetricContext:
    """Everything a metric needs to run against one dataset.

    Parameters
    ----------
    port:
        Row reader for the source tables.
    mode:
        Identification mode of the dataset.
    dataset_id:
        ``random_id`` scoping every query. Changed through :meth:`reset`.
    cache:
        Numeric values shared between metrics (window bounds and the like).

    Non-numeric intermediate data (peak lookups, charge counts, ...) lives
    in :attr:`memo`, which :meth:`reset` clears together with the cache.
    """

    def __init__(
        self,
        port: DataAccessPort,
        mode: IdentificationMode | str = IdentificationMode.PHRP,
        dataset_id: int = 0,
        cache: ScratchCache | None = None,
    ):
        self.port = port
        self.mode = IdentificationMode.parse(mode)
        self.dataset_id = dataset_id
        self.cache = cache if cache is not None else ScratchCache()
        self.memo: dict[str, Any] = {}

    def reset(self, dataset_id: int) -> None:
        self.dataset_id = dataset_id
        self.cache.reset()
        self.memo.clear()

    def memoize(self, key: str, factory: Callable[[], Any]) -> Any:
        if key not in self.memo:
            self.memo[key] = factory()
        return self.memo[key]

    def params(self, sql: str, **extra: Any) -> dict[str, Any]:
        params: dict[str, Any] = {"random_id": self.dataset_id}
        if ":threshold" in sql:
            params["threshold"] = self.mode.threshold
        params.update(extra)
        return params

    def rows(self, sql: str, columns: Sequence[str], **extra: Any) -> list[dict[str, str]]:
        """Run ``sql`` and return every row as strings."""

        self.port.set_query(sql, self.params(sql, **extra))
        self.port.init_reader()
        result = []
        while True:
            ok, row = self.port.read_row(columns)
            if not ok:
                break
            result.append(row)
        return result

    def single(self, sql: str, columns: Sequence[str], **extra: Any) -> dict[str, str]:
        self.port.set_query(sql, self.params(sql, **extra))
        self.port.init_reader()
        ok, row = self.port.read_single_row(columns)
        return row if ok else {}

    def decode(
        self,
        sql: str,
        fields: dict[str, Callable[[Any], Any]],
        source: str,
        **extra: Any,
    ) -> list[tuple]:
        """Run ``sql`` and decode each row with ``fields``.

        Rows with a field that does not parse are dropped; ``source`` names
        the metric in the warning that reports how many were dropped.
        """

        decoder = RowDecoder(fields)
        values = list(decoder.decode(self.rows(sql, list(fields), **extra)))
        if decoder.skipped:
            logger.warning(
                "%s: skipped %d row(s) with malformed values (dataset %s)",
                source,
                decoder.skipped,
                self.dataset_id,
            )
        return values
