"""CLI entry point for taskquery."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskquery",
        description="Filter, sort and group markdown tasks with a query language",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Query instructions, one per line",
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        default=None,
        help="Read the query from a file instead",
    )
    parser.add_argument(
        "--task-root",
        type=Path,
        default=None,
        help="Directory containing task files and taskquery.yml (default: current directory)",
    )
    parser.add_argument(
        "--global-query",
        default=None,
        help="Instructions prepended to the query (overrides taskquery.yml)",
    )
    parser.add_argument(
        "--global-filter",
        default=None,
        help="Only consider tasks carrying this tag (overrides taskquery.yml)",
    )
    parser.add_argument(
        "--explain",
        action="store_true",
        help="Explain the query instead of running it",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    # Build settings from CLI args
    settings_kwargs: dict = {}
    if args.task_root:
        settings_kwargs["task_root"] = args.task_root
    if args.global_query is not None:
        settings_kwargs["global_query"] = args.global_query
    if args.global_filter is not None:
        settings_kwargs["global_filter"] = args.global_filter
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file

    settings = Settings(**settings_kwargs)

    setup_logging(settings.verbose, settings.log_file)

    from .cli.query import read_source, run_query

    source = read_source(args.query, args.file)
    file_path = str(args.file) if args.file is not None else None
    exit_code = run_query(settings, source, file_path=file_path, explain=args.explain)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
