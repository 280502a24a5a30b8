"""``smaqc run``: compute measurements for one or more datasets."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.table import Table

from smaqc.config.settings import RunConfig
from smaqc.errors import ConfigError, DataAccessError
from smaqc.logging import get_logger
from smaqc.metrics.mode import IdentificationMode
from smaqc.pipeline import DatasetResults, run_datasets

logger = get_logger(__file__)

_EXPORT_SUFFIXES = {".csv": "csv", ".tsv": "tsv", ".json": "json"}


def register_arguments(parser):
    """Attach the ``run`` options to ``parser``.

    Examples
    --------
    >>> import argparse
    >>> parser = argparse.ArgumentParser(prog="smaqc run")
    >>> register_arguments(parser)
    >>> parser.parse_args(["--db", "qc.db", "--dataset", "7:QC_Shew"]).dataset
    ['7:QC_Shew']
    """

    parser.add_argument("--db", dest="db", help="SQLite file or SQLAlchemy URI (env SMAQC_DB_PATH)")
    parser.add_argument(
        "--dataset",
        action="append",
        required=True,
        metavar="ID[:NAME]",
        help="random_id of a loaded dataset, optionally with a display name; repeatable",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in IdentificationMode],
        help="identification tables to read (env SMAQC_MODE, default PHRP)",
    )
    parser.add_argument("--measurements", help="XML, JSON or text file listing measurements to run")
    parser.add_argument("--instrument-id", dest="instrument_id", default="")
    parser.add_argument(
        "--output",
        help="results file or folder; .csv/.tsv/.json export a table, anything else the SMAQC text file",
    )


def _output_format(output: str | None) -> str:
    if output is None:
        return "text"
    return _EXPORT_SUFFIXES.get(Path(output).suffix.lower(), "text")


def render_results(runs: Sequence[DatasetResults], console: Console | None = None) -> None:
    """Pretty-print measurement values, one column per dataset."""

    if console is None:
        console = Console()

    table = Table(title="SMAQC Results", show_lines=False)
    table.add_column("Measurement", style="bold cyan")
    for run in runs:
        table.add_column(run.label, justify="right", style="green")

    names: list[str] = []
    for run in runs:
        names.extend(name for name in run.values if name not in names)

    if not names:
        table.add_row("[dim]No measurements[/dim]", *["" for _ in runs])
    for name in names:
        cells = []
        for run in runs:
            value = run.values.get(name, "")
            cells.append("[dim]Null[/dim]" if value == "Null" else value)
        table.add_row(name, *cells)

    console.print(table)


def dispatch(args):
    try:
        config = RunConfig.build(
            db_path=args.db,
            mode=args.mode,
            datasets=args.dataset,
            measurements_file=args.measurements,
            instrument_id=args.instrument_id,
            output=args.output,
            output_format=_output_format(args.output),
        )
        runs = run_datasets(config)
    except (ConfigError, DataAccessError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc

    render_results(runs)
    if config.output is not None:
        logger.info("results written to %s", config.output)
