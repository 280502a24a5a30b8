import json

import pytest

from smaqc.config import DatasetRef, RunConfig, load_measurement_names
from smaqc.errors import ConfigError
from smaqc.metrics.mode import IdentificationMode
from smaqc.metrics.registry import CATALOG


def test_dataset_ref_parse():
    ref = DatasetRef.parse("42:QC_Shew_20_01")
    assert ref.dataset_id == 42
    assert ref.label == "QC_Shew_20_01"

    bare = DatasetRef.parse("7")
    assert bare.name is None
    assert bare.label == "7"


@pytest.mark.parametrize("value", ["abc", ":name", "-3"])
def test_dataset_ref_parse_rejects_bad_ids(value):
    with pytest.raises(ConfigError):
        DatasetRef.parse(value)


def test_measurements_from_xml(tmp_path):
    path = tmp_path / "measurements.xml"
    path.write_text(
        '<?xml version="1.0"?>\n'
        "<measurements>\n"
        '  <measurement name="C_1A" />\n'
        '  <measurement name="MS1_5D" />\n'
        "</measurements>\n"
    )
    assert load_measurement_names(path) == ["C_1A", "MS1_5D"]


def test_measurements_from_json(tmp_path):
    listed = tmp_path / "list.json"
    listed.write_text(json.dumps(["P_1A", "P_1B"]))
    wrapped = tmp_path / "wrapped.json"
    wrapped.write_text(json.dumps({"measurements": ["IS_2"]}))

    assert load_measurement_names(listed) == ["P_1A", "P_1B"]
    assert load_measurement_names(wrapped) == ["IS_2"]


def test_measurements_from_text_keeps_unknown_names(tmp_path):
    path = tmp_path / "measurements.txt"
    path.write_text("# chromatography\nC_2A\n\n  DS_2B  \nNOT_REAL\n")
    assert load_measurement_names(path) == ["C_2A", "DS_2B", "NOT_REAL"]


@pytest.mark.parametrize("content", ["", "# nothing\n", "[]", "<measurements />", "<broken", '{"other": 1}'])
def test_measurements_invalid_or_empty(tmp_path, content):
    path = tmp_path / "measurements.cfg"
    path.write_text(content)
    with pytest.raises(ConfigError):
        load_measurement_names(path)


def test_measurements_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_measurement_names(tmp_path / "absent.txt")


def test_build_defaults(monkeypatch):
    monkeypatch.delenv("SMAQC_MODE", raising=False)
    config = RunConfig.build(db_path="qc.db", datasets=["1", "2:second"])

    assert config.mode is IdentificationMode.PHRP
    assert config.measurements == list(CATALOG)
    assert [ref.label for ref in config.datasets] == ["1", "second"]
    assert config.output is None
    assert config.output_format == "text"


def test_build_environment_fallbacks(monkeypatch, tmp_path):
    monkeypatch.setenv("SMAQC_DB_PATH", str(tmp_path / "env.db"))
    monkeypatch.setenv("SMAQC_MODE", "legacy")

    config = RunConfig.build(datasets=["3"])

    assert config.db_path == str(tmp_path / "env.db")
    assert config.mode is IdentificationMode.LEGACY


def test_build_without_database(monkeypatch):
    monkeypatch.delenv("SMAQC_DB_PATH", raising=False)
    with pytest.raises(ConfigError, match="SMAQC_DB_PATH"):
        RunConfig.build(datasets=["1"])


@pytest.mark.parametrize("kwargs", [{"mode": "mascot"}, {"output_format": "xlsx"}])
def test_build_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        RunConfig.build(db_path="qc.db", datasets=["1"], **kwargs)


def test_build_reads_measurements_file(tmp_path):
    path = tmp_path / "m.txt"
    path.write_text("C_1A\nC_1B\n")
    config = RunConfig.build(db_path="qc.db", datasets=["1"], measurements_file=path)
    assert config.measurements == ["C_1A", "C_1B"]
