# smaqc/pipeline.py
"""Run the measurement engine over every configured dataset, one at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from smaqc import __version__
from smaqc.config.settings import RunConfig
from smaqc.db.connect import make_engine
from smaqc.db.port import SQLAlchemyPort
from smaqc.io.results import export_results, write_dataset
from smaqc.logging import get_logger
from smaqc.metrics.dispatcher import MetricDispatcher
from smaqc.metrics.engine import MeasurementEngine

logger = get_logger(__file__)


@dataclass
class DatasetResults:
    dataset_id: int
    name: Optional[str] = None
    instrument_id: str = ""
    scan_date: str = ""
    values: dict[str, str] = field(default_factory=dict)

    @property
    def label(self) -> str:
        return self.name or str(self.dataset_id)


def run_datasets(
    config: RunConfig,
    port: SQLAlchemyPort | None = None,
    on_progress: Optional[Callable[[str], None]] = None,
) -> list[DatasetResults]:
    """Compute ``config.measurements`` for each dataset in ``config.datasets``.

    Datasets run sequentially against one dispatcher; each run starts from
    a reset cache. When ``config.output`` is set, the text results file is
    written as each dataset completes, or the long table is exported at
    the end for the csv/tsv/json formats.
    """

    owns_engine = port is None
    if port is None:
        port = SQLAlchemyPort(make_engine(config.db_path))

    dispatcher = MetricDispatcher(port, config.mode)
    engine = MeasurementEngine(dispatcher, on_progress=on_progress)
    runs: list[DatasetResults] = []

    try:
        for index, dataset in enumerate(config.datasets):
            logger.info("Now running measurements on %s (random_id %s)", dataset.label, dataset.dataset_id)
            values = engine.run(config.measurements, dataset.dataset_id)
            run = DatasetResults(
                dataset_id=dataset.dataset_id,
                name=dataset.name,
                instrument_id=config.instrument_id,
                scan_date=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                values=values,
            )
            runs.append(run)
            if config.output is not None and config.output_format == "text":
                write_dataset(config.output, run, __version__, first=index == 0)
    finally:
        port.close()
        if owns_engine:
            port.engine.dispose()

    if config.output is not None and config.output_format != "text" and runs:
        export_results(config.output, runs)

    logger.info("SMAQC analysis complete: %d dataset(s)", len(runs))
    return runs
