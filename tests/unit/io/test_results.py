import json

import pandas as pd
import pytest

from smaqc.errors import ConfigError
from smaqc.io.results import (
    RESULTS_FILENAME,
    export_results,
    get_writer,
    results_frame,
    write_results_text,
)
from smaqc.pipeline import DatasetResults


@pytest.fixture
def runs():
    return [
        DatasetResults(
            dataset_id=1,
            name="QC_A",
            instrument_id="VOrbi05",
            scan_date="2026-01-02 03:04:05",
            values={"MS1_1": "30", "C_1A": "0.666667", "C_4A": "Null"},
        ),
        DatasetResults(dataset_id=2, values={"C_1A": "0.500000"}),
    ]


def test_text_results_layout(tmp_path, runs):
    target = write_results_text(tmp_path / "out.txt", runs, "1.3.0")
    lines = target.read_text().splitlines()

    assert lines[:7] == [
        "SMAQC SCANNER RESULTS",
        "-----------------------------------------------------------",
        "SMAQC Version: 1.3.0",
        "Instrument ID: VOrbi05",
        "Scan Date: 2026-01-02 03:04:05",
        "[Data]",
        "Dataset, Measurement Name, Measurement Value",
    ]
    # rows sorted by name; Null leaves the value empty
    assert lines[7:] == [
        "QC_A, C_1A, 0.666667",
        "QC_A, C_4A,",
        "QC_A, MS1_1, 30",
        "",
        "2, C_1A, 0.500000",
        "",
    ]


def test_text_results_into_directory(tmp_path, runs):
    target = write_results_text(tmp_path, runs[:1], "1.3.0")
    assert target == tmp_path / RESULTS_FILENAME
    assert target.read_text().count("SMAQC SCANNER RESULTS") == 1


def test_text_results_overwrites_previous_file(tmp_path, runs):
    path = tmp_path / "out.txt"
    write_results_text(path, runs, "1.3.0")
    write_results_text(path, runs, "1.3.0")
    assert path.read_text().count("SMAQC SCANNER RESULTS") == 1


def test_results_frame(runs):
    df = results_frame(runs)
    assert list(df.columns) == ["Dataset", "DatasetID", "Measurement", "Value"]
    assert len(df) == 4
    null_row = df[df.Measurement == "C_4A"].iloc[0]
    assert null_row.Value is None


def test_export_csv_and_json(tmp_path, runs):
    csv_path = export_results(tmp_path / "results.csv", runs)
    frame = pd.read_csv(csv_path)
    assert set(frame.Dataset.astype(str)) == {"QC_A", "2"}

    json_path = export_results(tmp_path / "nested" / "results.json", runs)
    records = json.loads(json_path.read_text())
    assert records[0]["Measurement"] == "MS1_1"
    assert records[0]["Value"] == "30"


def test_export_tsv(tmp_path, runs):
    path = export_results(tmp_path / "results.tsv", runs)
    header = path.read_text().splitlines()[0]
    assert header == "Dataset\tDatasetID\tMeasurement\tValue"


def test_unsupported_export(tmp_path, runs):
    assert get_writer(results_frame(runs), "results.xlsx") is None
    with pytest.raises(ConfigError):
        export_results(tmp_path / "results.xlsx", runs)
