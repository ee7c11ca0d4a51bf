# cli.py
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import uvicorn

from config import LOG_LEVELS, load_settings
from errors import StartupPersistenceError
from logging_setup import setup_logging
from main import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve the Kanban task API.")
    parser.add_argument("--host", type=str, default=None, help="Bind address. Overrides KANBAN_HOST.")
    parser.add_argument("--port", type=int, default=None, help="Bind port. Overrides KANBAN_PORT.")
    parser.add_argument("--data-file", type=str, default=None, help="JSON snapshot path. Overrides KANBAN_DATA_FILE.")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Overrides KANBAN_LOG_LEVEL.")
    return parser


def main(argv: Optional[List[str]] = None):
    args = build_parser().parse_args(argv)

    settings = load_settings()
    overrides = {}
    if args.host is not None:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.data_file is not None:
        overrides["data_file"] = Path(args.data_file)
    if args.log_level is not None:
        overrides["log_level"] = args.log_level
    settings = replace(settings, **overrides)

    setup_logging(settings.log_level)

    # --- Pre-flight: load the snapshot before binding the port ---
    app = create_app(settings)
    try:
        app.state.store.load_from_persistence()
    except StartupPersistenceError as e:
        logger.critical("FATAL: %s. The application cannot start.", e)
        sys.exit(1)

    logger.info("Kanban backend listening on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, lifespan="on", log_config=None)


if __name__ == "__main__":
    main()
