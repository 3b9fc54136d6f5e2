#!/usr/bin/env python3

from dataclasses import replace
from pathlib import Path

import uvicorn

from api.app import create_app
from logger import get_logger

logger = get_logger()


def cmd_serve(args, config):
    """Run the HTTP API until interrupted."""
    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.static_dir is not None:
        overrides["static_dir"] = args.static_dir
    config = replace(config, **overrides)

    app = create_app(config)

    logger.info(f"Server starting on {config.host}:{config.port}")
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )


def setup_parser(subparsers):
    """Setup serve subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Serve the task API (and front-end assets, if configured)",
    )
    parser.add_argument("--host", help="Interface to bind (default from config)")
    parser.add_argument("--port", type=int, help="Port to listen on (default from config)")
    parser.add_argument(
        "--static-dir",
        type=Path,
        help="Directory of front-end assets to serve for non-API paths",
    )
    parser.set_defaults(func=cmd_serve)
