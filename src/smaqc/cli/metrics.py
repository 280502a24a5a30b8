"""``smaqc metrics``: inspect the measurement catalog."""

from rich.console import Console
from rich.table import Table

from smaqc.logging import get_logger
from smaqc.metrics.registry import CATALOG, DESCRIPTIONS


def register_subcommands(subparsers):
    subparsers.add_parser("list", help="List every measurement in output order")


def _render_catalog(console: Console | None = None) -> None:
    if console is None:
        console = Console()

    table = Table(title="SMAQC Measurements")
    table.add_column("Name", style="bold cyan")
    table.add_column("Description")
    for name in CATALOG:
        table.add_row(name, DESCRIPTIONS.get(name, ""))
    console.print(table)


def dispatch(args):
    if args.subcommand == "list":
        _render_catalog()
    else:
        get_logger(__file__).error("No handler for subcommand: %s", args.subcommand)
