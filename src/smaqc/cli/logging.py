"""``smaqc logging``: inspect and persist logging settings.

Saved settings apply to later runs; ``SMAQC_LOG_DIR`` still overrides a
saved directory.
"""

import logging

from rich.console import Console
from rich.table import Table

from smaqc.logging import get_logger, reset_logger
from smaqc.logging.config import LEVEL_NAMES, load_settings, save_log_dir, save_log_level, settings_path
from smaqc.logging.logging import configured_log_file, get_configured_level


def register_subcommands(subparsers):
    set_level_parser = subparsers.add_parser("set-level", help="Persist the logging level")
    set_level_parser.add_argument("level", choices=LEVEL_NAMES, help="Level used by later runs")

    set_dir_parser = subparsers.add_parser("set-dir", help="Persist the log directory")
    set_dir_parser.add_argument("path", help="Directory that receives smaqc.log")

    subparsers.add_parser("show-path", help="Print the log file location")
    subparsers.add_parser("show-level", help="Print the effective logging level")
    subparsers.add_parser("show", help="Print every logging setting")


def _show_settings(console=None):
    if console is None:
        console = Console()

    saved = load_settings()
    table = Table(title="SMAQC Logging")
    table.add_column("Setting", style="bold cyan")
    table.add_column("Value")
    table.add_row("config file", str(settings_path()))
    table.add_row("saved level", saved.log_level or "[dim]unset[/dim]")
    table.add_row("saved directory", saved.log_dir or "[dim]unset[/dim]")
    table.add_row("effective level", get_configured_level())
    table.add_row("log file", str(configured_log_file().resolve()))
    console.print(table)


def dispatch(args):
    if args.subcommand == "set-level":
        path = save_log_level(args.level)
        reset_logger()
        get_logger(level=getattr(logging, args.level))
        print(f"{args.level} saved to {path}")
    elif args.subcommand == "set-dir":
        path = save_log_dir(args.path)
        reset_logger()
        get_logger()
        print(f"log directory saved to {path}")
    elif args.subcommand == "show-path":
        print(configured_log_file().resolve())
    elif args.subcommand == "show-level":
        print(get_configured_level())
    elif args.subcommand == "show":
        _show_settings()
    else:
        get_logger(__file__).error("No handler for subcommand: %s", args.subcommand)
