from __future__ import annotations

import time
from typing import Callable, Iterable, Optional

from smaqc.logging import get_logger
from smaqc.metrics.dispatcher import MetricDispatcher

logger = get_logger(__file__)

NULL = "Null"


class MeasurementEngine:
    """Run a list of measurements for one dataset.

    Each metric is isolated: an empty result or a failure is recorded as
    ``"Null"`` and the batch carries on.

    Parameters
    ----------
    dispatcher:
        Resolves names to bound metrics.
    on_progress:
        Optional callable receiving each progress line, in addition to the
        log.
    """

    def __init__(
        self,
        dispatcher: MetricDispatcher,
        on_progress: Optional[Callable[[str], None]] = None,
    ):
        self.dispatcher = dispatcher
        self.on_progress = on_progress

    def _unique(self, names: Iterable[str]) -> list[str]:
        seen: list[str] = []
        for name in names:
            if name in seen:
                logger.warning("measurement %s listed more than once; running it once", name)
                continue
            seen.append(name)
        return seen

    def run(self, names: Iterable[str], dataset_id: int) -> dict[str, str]:
        """Compute ``names`` for ``dataset_id``.

        Returns
        -------
        dict[str, str]
            One entry per distinct name, in the order first listed.
        """

        names = self._unique(names)
        self.dispatcher.reset(dataset_id)
        results: dict[str, str] = {}

        for index, name in enumerate(names, start=1):
            started = time.perf_counter()
            percent = index / len(names) * 100
            try:
                value = self.dispatcher.run(name)
            except Exception as exc:
                value = NULL
                logger.error("%s failed: %s", name, exc)

            results[name] = value if value else NULL
            elapsed = time.perf_counter() - started
            message = f"{name}: complete in {elapsed:.2f}s; {percent:.0f}% complete"
            logger.info(message)
            if self.on_progress is not None:
                self.on_progress(message)

        return results
