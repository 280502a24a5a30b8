import os
import sys
from pathlib import Path

import pytest

# Ensure the src directory is on the path for imports
root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root / 'src'))
sys.path.insert(0, str(root / 'tests'))

log_dir = root / "logs"
log_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("SMAQC_LOG_DIR", str(log_dir))

from data_generator import (  # noqa: E402
    LEGACY_ID,
    MASS_ERROR_ID,
    PHRP_ID,
    load_legacy_dataset,
    load_mass_error_dataset,
    load_phrp_dataset,
    make_engine,
)
from smaqc.db.port import SQLAlchemyPort  # noqa: E402
from smaqc.metrics.dispatcher import MetricDispatcher  # noqa: E402
from smaqc.metrics.engine import MeasurementEngine  # noqa: E402


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(tmp_path)
    yield engine
    engine.dispose()


@pytest.fixture
def port(engine):
    port = SQLAlchemyPort(engine)
    yield port
    port.close()


@pytest.fixture
def loaded_engine(engine):
    """Engine holding the legacy, PHRP and mass-error test datasets."""

    load_legacy_dataset(engine)
    load_phrp_dataset(engine)
    load_mass_error_dataset(engine)
    return engine


@pytest.fixture
def measure(loaded_engine):
    """Run measurements for one dataset: ``measure(mode, dataset_id, names=None)``."""

    ports = []

    def _measure(mode, dataset_id, names=None):
        port = SQLAlchemyPort(loaded_engine)
        ports.append(port)
        dispatcher = MetricDispatcher(port, mode)
        names = list(dispatcher.registry) if names is None else names
        return MeasurementEngine(dispatcher).run(names, dataset_id)

    yield _measure
    for port in ports:
        port.close()


@pytest.fixture
def legacy_results(measure):
    return measure("legacy", LEGACY_ID)


@pytest.fixture
def phrp_results(measure):
    return measure("PHRP", PHRP_ID)


@pytest.fixture
def mass_error_results(measure):
    return measure("legacy", MASS_ERROR_ID)
