from __future__ import annotations

from functools import partial
from typing import Callable, Mapping

from smaqc.db.port import DataAccessPort
from smaqc.errors import UnknownMetricError
from smaqc.metrics.context import MetricContext
from smaqc.metrics.mode import IdentificationMode
from smaqc.metrics.registry import METRICS, MetricFunc


class MetricDispatcher:
    """Resolve measurement names to metrics bound to one shared context.

    Parameters
    ----------
    port:
        Data access port used by every metric.
    mode:
        Identification mode of the datasets processed.
    registry:
        Name -> metric table; defaults to the full catalog.
    """

    def __init__(
        self,
        port: DataAccessPort,
        mode: IdentificationMode | str = IdentificationMode.PHRP,
        registry: Mapping[str, MetricFunc] | None = None,
    ):
        self.registry = dict(METRICS if registry is None else registry)
        self.context = MetricContext(port, mode)

    @property
    def mode(self) -> IdentificationMode:
        return self.context.mode

    def __contains__(self, name: str) -> bool:
        return name in self.registry

    def resolve(self, name: str) -> Callable[[], str]:
        try:
            metric = self.registry[name]
        except KeyError:
            raise UnknownMetricError(name) from None
        return partial(metric, self.context)

    def run(self, name: str) -> str:
        return self.resolve(name)()

    def reset(self, dataset_id: int) -> None:
        """Point at ``dataset_id`` and drop everything cached for the previous one."""
        self.context.reset(dataset_id)
