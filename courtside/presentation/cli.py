"""
Command-line interface for inspecting a Courtside session.

Builds an Application from the environment settings (optionally overridden
by flags) and prints one JSON document describing its state.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, List, Optional

from courtside.application import Application
from courtside.config import settings
from courtside.config.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

COMMANDS = ("summary", "events", "venues")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="courtside", description="Sports venue and academy booking stores")
    parser.add_argument("command", nargs="?", choices=COMMANDS, default="summary",
                        help="What to print (default: summary)")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default=None, help="Set logging level")
    parser.add_argument("--data-dir", help="Directory for persisted academy records")
    parser.add_argument("--no-seed", action="store_true", help="Start with empty stores")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode (DEBUG logging)")
    parser.add_argument("--query", default="", help="Search text for the events and venues commands")
    return parser


def render(app: Application, command: str, query: str = "") -> Any:
    """
    Produce the JSON-ready output of a command.

    Args:
        app: Running application
        command: One of summary, events, venues
        query: Search text applied to events and venues

    Returns:
        JSON-serializable data
    """
    if command == "events":
        return [event.to_dict() for event in app.booking_store.search_events(query)]
    if command == "venues":
        return [venue.to_dict() for venue in app.booking_store.search_venues(query)]
    return app.summary()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = settings.model_copy(deep=True)
    if args.debug:
        config.debug_mode = True

    log_level = args.log_level or ("DEBUG" if config.debug_mode else None)
    configure_logging(config.logging, level=log_level)

    if args.data_dir:
        config.storage.data_dir = Path(args.data_dir)
    if args.no_seed:
        config.seed_dummy_data = False

    app = Application(config)
    try:
        output = render(app, args.command, args.query)
        json.dump(output, sys.stdout, indent=2, default=str)
        sys.stdout.write("\n")
    finally:
        app.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
