#!/usr/bin/env python3
"""
tsk CLI - Personal task tracker.

Usage:
    python -m cli [--db PATH] <command> <subcommand> [options]

Commands:
    serve       Run the HTTP API
    categories  List and create categories
    migrate     Database migrations

Examples:
    python -m cli serve --port 8080
    python -m cli --db ./tsk.db serve
    python -m cli categories list
    python -m cli categories create Work
    python -m cli migrate status
    python -m cli migrate apply
"""

import sys
import argparse
from dataclasses import replace
from pathlib import Path
from cli import categories, migrate, serve
from config import get_version, load_config
from db.schema import init_db
from services.base import Services
from logger import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tsk",
        description="tsk - Personal task tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"tsk version {get_version()}",
    )
    parser.add_argument(
        "--db",
        type=Path,
        help="Database file path (overrides the configured location)",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    serve.setup_parser(subparsers)
    categories.setup_parser(subparsers)
    migrate.setup_parser(subparsers)

    return parser


def main(argv=None):
    """Main CLI entry point with subcommands."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        sys.exit(1)

    try:
        config = load_config()
        if args.db is not None:
            config = replace(
                config, db_data_dir=args.db.parent, db_filename=args.db.name
            )

        setup_logging(config)

        # serve builds its own services inside the app; migrate works on
        # the raw database
        if args.command == "serve":
            args.func(args, config)
        elif args.command == "migrate":
            args.func(args, Services(config).db_manager)
        else:
            services = Services(config)
            init_db(services.db_manager)
            args.func(args, services)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
