# io/results.py
from __future__ import annotations

from functools import partial
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, TextIO

import pandas as pd

from smaqc.errors import ConfigError
from smaqc.logging import get_logger

if TYPE_CHECKING:
    from smaqc.pipeline import DatasetResults

logger = get_logger(__file__)

RESULTS_FILENAME = "SMAQC_results.txt"
NULL = "Null"


def resolve_results_path(path: str | Path) -> Path:
    """Return the results file for ``path``; a directory gets ``SMAQC_results.txt``."""

    path = Path(path)
    if path.is_dir():
        return path / RESULTS_FILENAME
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _write_header(handle: TextIO, run: "DatasetResults", version: str) -> None:
    handle.write("SMAQC SCANNER RESULTS\n")
    handle.write("-----------------------------------------------------------\n")
    handle.write(f"SMAQC Version: {version}\n")
    handle.write(f"Instrument ID: {run.instrument_id}\n")
    handle.write(f"Scan Date: {run.scan_date}\n")
    handle.write("[Data]\n")
    handle.write("Dataset, Measurement Name, Measurement Value\n")


def _write_rows(handle: TextIO, run: "DatasetResults") -> None:
    for name in sorted(run.values):
        value = run.values[name]
        if not value:
            continue
        line = f"{run.label}, {name},"
        if value != NULL:
            line += f" {value}"
        handle.write(line + "\n")
    handle.write("\n")


def write_dataset(path: str | Path, run: "DatasetResults", version: str, first: bool) -> Path:
    """Write one dataset's block; ``first`` creates the file with its header."""

    target = resolve_results_path(path)
    mode = "w" if first else "a"
    with target.open(mode, encoding="utf-8") as handle:
        if first:
            _write_header(handle, run, version)
        _write_rows(handle, run)
    logger.info("wrote %d measurement(s) for %s to %s", len(run.values), run.label, target)
    return target


def write_results_text(path: str | Path, runs: Iterable["DatasetResults"], version: str) -> Path:
    """Write the SMAQC results file for ``runs``.

    The first dataset creates the file (banner, version, instrument id,
    scan date, column header). Later datasets append their rows. Rows are
    sorted by measurement name and a ``Null`` value leaves the value field
    empty.
    """

    target = resolve_results_path(path)
    for index, run in enumerate(runs):
        write_dataset(target, run, version, first=index == 0)
    return target


def results_frame(runs: Iterable["DatasetResults"]) -> pd.DataFrame:
    records = [
        {
            "Dataset": run.label,
            "DatasetID": run.dataset_id,
            "Measurement": name,
            "Value": None if value == NULL else value,
        }
        for run in runs
        for name, value in run.values.items()
    ]
    return pd.DataFrame.from_records(
        records, columns=["Dataset", "DatasetID", "Measurement", "Value"]
    )


def get_writer(df: pd.DataFrame, file: str):
    if file.endswith(".tsv"):
        return partial(df.to_csv, sep="\t", index=False)
    elif file.endswith(".csv"):
        return partial(df.to_csv, index=False)
    elif file.endswith(".json"):
        return partial(df.to_json, orient="records", indent=2)

    else:
        logger.error(f"do not know how to write file: {file}")
        return None


def export_results(path: str | Path, runs: Iterable["DatasetResults"]) -> Path:
    """Write ``runs`` as a long table (one row per dataset and measurement)."""

    path = Path(path)
    df = results_frame(runs)
    writer = get_writer(df, str(path))
    if writer is None:
        raise ConfigError(f"unsupported export format: {path.suffix or path.name}")
    path.parent.mkdir(parents=True, exist_ok=True)
    writer(path)
    return path
