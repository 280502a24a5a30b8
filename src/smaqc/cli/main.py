# smaqc/cli/main.py
import argparse

from smaqc import __version__
from smaqc.cli import logging as logging_cli
from smaqc.cli import metrics, run


def main(argv=None):

    parser = argparse.ArgumentParser(prog="smaqc", description="SMAQC quality metrics for LC-MS/MS runs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Compute measurements for loaded datasets")
    run.register_arguments(run_parser)

    metrics_parser = subparsers.add_parser("metrics", help="Measurement catalog")
    metrics_subparsers = metrics_parser.add_subparsers(dest="subcommand", required=True)
    metrics.register_subcommands(metrics_subparsers)

    logging_parser = subparsers.add_parser("logging", help="Logging utilities")
    logging_subparsers = logging_parser.add_subparsers(dest="subcommand", required=True)
    logging_cli.register_subcommands(logging_subparsers)

    args = parser.parse_args(argv)

    if args.command == "run":
        run.dispatch(args)
    elif args.command == "metrics":
        metrics.dispatch(args)
    elif args.command == "logging":
        logging_cli.dispatch(args)


if __name__ == "__main__":
    main()
