"""
Main entry point for SPACEBREAK.

Loads .env, applies command line overrides to the settings, configures
logging and runs the game window.
"""

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from dotenv import load_dotenv
from pydantic import ValidationError

from spacebreak.config.settings import Settings


def setup_logging(debug: bool = False, log_file: str | None = None) -> None:
    """Configure logging with console and optional file output."""
    level = logging.DEBUG if debug else logging.INFO

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S"
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        # Truncate on each run for fresh logs
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logging.info(f"Logging to file: {log_file}")

    # Per-frame actor chatter only shows with --debug
    logging.getLogger("spacebreak.engine").setLevel(logging.NOTSET if debug else logging.INFO)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="spacebreak",
        description="Breakout meets space invaders.",
    )
    parser.add_argument("--debug", action="store_true", help="verbose logging and debug panel")
    parser.add_argument("--language", choices=["en", "de"], help="dialog language")
    parser.add_argument("--fps", type=int, help="frame rate cap")
    parser.add_argument("--scale", type=float, help="window scale factor")
    parser.add_argument("--log-file", help="also write the log to this file")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Environment/.env settings with command line flags on top."""
    data = Settings().model_dump()

    if args.debug:
        data["debug"] = True
    if args.language:
        data["language"] = args.language
    if args.log_file:
        data["log_file"] = args.log_file
    if args.fps is not None:
        data["display"]["fps"] = args.fps
    if args.scale is not None:
        data["display"]["scale"] = args.scale

    return Settings(**data)


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    load_dotenv()
    args = parse_args(argv)

    try:
        settings = build_settings(args)
    except ValidationError as e:
        print(f"Invalid settings:\n{e}", file=sys.stderr)
        sys.exit(2)

    setup_logging(settings.debug, settings.log_file)

    logger = logging.getLogger(__name__)
    logger.info("SPACEBREAK starting...")

    from spacebreak.app import SpacebreakApp

    try:
        asyncio.run(SpacebreakApp(settings).run())
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)

    logger.info("SPACEBREAK stopped")


if __name__ == "__main__":
    main()
