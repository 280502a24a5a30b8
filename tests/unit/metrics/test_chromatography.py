import pytest
from sqlalchemy import insert

from data_generator import LEGACY_ID, PHRP_ID, REVERSED_ID, get_session, load_legacy_dataset, xt
from smaqc.metrics import chromatography
from smaqc.metrics.context import MetricContext
from smaqc.metrics.dispatcher import MetricDispatcher
from smaqc.metrics.engine import MeasurementEngine
from smaqc.metrics.registry import CATALOG


@pytest.mark.parametrize(
    "name, expected",
    [
        ("C_1A", "0.666667"),
        ("C_1B", "0.000000"),
        ("C_2A", "4.0000"),
        ("C_2B", "0.7500"),
        ("C_3A", "180.00"),
        ("C_3B", "210.00"),
        ("C_4A", "Null"),
        ("C_4B", "120.00"),
        ("C_4C", "Null"),
    ],
)
def test_legacy_chromatography(legacy_results, name, expected):
    assert legacy_results[name] == expected


def test_phrp_uses_spectral_probability_filter(phrp_results):
    assert phrp_results["C_1A"] == "0.666667"
    assert phrp_results["C_2A"] == "4.0000"


def test_elution_window_is_cached(loaded_engine, port):
    ctx = MetricContext(port, "legacy", LEGACY_ID)
    window = chromatography.elution_window(ctx)

    assert window == chromatography.ElutionWindow(scan_start=2, scan_end=6, minutes=4.0, first_scan=2)
    assert ctx.cache.get(chromatography.REGION_SCAN_START) == 2
    assert ctx.cache.get(chromatography.SCAN_FIRST_FILTER_PASSING_PEPTIDE) == 2

    ctx.cache.set(chromatography.TIME_MINUTES, 99.0)
    assert chromatography.elution_window(ctx).minutes == 99.0


def test_window_consumers_do_not_depend_on_order(measure):
    forward = measure("legacy", LEGACY_ID, ["C_2A", "DS_2A", "DS_2B", "MS1_2A", "MS1_2B"])
    backward = measure("legacy", LEGACY_ID, ["MS1_2B", "MS1_2A", "DS_2B", "DS_2A", "C_2A"])
    assert forward == backward


def test_peak_width_keeps_best_scan_per_peptide_and_charge(loaded_engine, port):
    ctx = MetricContext(port, "PHRP", PHRP_ID)
    data = chromatography._load_peak_width_data(ctx)
    assert data.best_scans == [2, 4, 6, 10]


def test_row_order_does_not_change_results(loaded_engine, port):
    load_legacy_dataset(loaded_engine, random_id=REVERSED_ID, reverse=True)
    runner = MeasurementEngine(MetricDispatcher(port, "legacy"))

    assert runner.run(CATALOG, REVERSED_ID) == runner.run(CATALOG, LEGACY_ID)


def test_peak_width_tie_goes_to_earliest_scan(engine, port):
    rows = [
        {"random_id": 5, "Result_ID": 1, "Scan": 8, "Charge": 2, "Peptide_Sequence": "K.SAMEPEP.R",
         "Peptide_Expectation_Value_Log": -3.0},
        {"random_id": 5, "Result_ID": 2, "Scan": 4, "Charge": 2, "Peptide_Sequence": "R.SAMEPEP.K",
         "Peptide_Expectation_Value_Log": -3.0},
        {"random_id": 5, "Result_ID": 3, "Scan": 6, "Charge": 3, "Peptide_Sequence": "R.SAMEPEP.K",
         "Peptide_Expectation_Value_Log": -1.0},
    ]
    with get_session(engine) as session:
        session.execute(insert(xt), rows)

    ctx = MetricContext(port, "legacy", 5)
    assert chromatography._best_scans(ctx) == [4, 6]
