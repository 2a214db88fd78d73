"""Main application entry point for the TTS comparison service.

This module provides the CLI interface: it loads configuration, sets up
logging, and serves the proxy API with uvicorn.
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import uvicorn

from src.config import get_settings
from src.tts_matrix.api import create_app
from src.tts_matrix.tts.factory import create_dispatcher

logger = logging.getLogger(__name__)


def setup_logging(log_level: Optional[str] = None) -> None:
    """Configure logging for the application.

    Args:
        log_level: Optional log level override. If None, uses settings.log_level.
    """
    if log_level is None:
        try:
            log_level = get_settings().log_level
        except Exception:
            log_level = "INFO"

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger("src.tts_matrix").setLevel(numeric_level)
    logging.getLogger("src.config").setLevel(numeric_level)
    # httpx logs every request at INFO, including vendor URLs
    logging.getLogger("httpx").setLevel(max(numeric_level, logging.WARNING))


def parse_arguments(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        description="TTS comparison service - one text, several vendors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with default configuration
  python -m src.tts_matrix.main

  # Bind to another port with debug logging
  python -m src.tts_matrix.main --port 9000 --log-level DEBUG

  # Show which vendors are configured without starting the server
  python -m src.tts_matrix.main --dry-run

  # Use custom environment file
  python -m src.tts_matrix.main --env-file .env.production
        """,
    )

    parser.add_argument(
        "--env-file",
        "--config",
        type=str,
        default=None,
        help="Path to environment file (default: .env)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Override log level (default: from settings)",
    )
    parser.add_argument("--host", type=str, default=None, help="Override bind address")
    parser.add_argument("--port", type=int, default=None, help="Override bind port")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the configured services and exit",
    )

    return parser.parse_args(argv)


def describe_configuration() -> list[str]:
    """Summarize the loaded configuration, one line per item. Never includes credentials."""
    settings = get_settings()
    dispatcher = create_dispatcher(settings)
    lines = [
        f"App Name: {settings.app_name}",
        f"Log Level: {settings.log_level}",
        f"Server: {settings.server.host}:{settings.server.port}",
        f"Max Text Length: {settings.max_text_length}",
    ]
    for descriptor in dispatcher.services():
        state = "configured" if descriptor.configured else "NOT configured"
        lines.append(f"  {descriptor.display_name} ({descriptor.id}): {state}")
    return lines


async def main(argv: Optional[list[str]] = None) -> None:
    """Main application entry point."""
    args = parse_arguments(argv)

    if args.env_file:
        env_path = Path(args.env_file)
        if not env_path.exists():
            print(f"Environment file not found: {env_path}", file=sys.stderr)
            sys.exit(1)
        # Subsequent get_settings() calls pick this up
        os.environ["ENV_FILE"] = str(env_path)

    settings = get_settings(env_file=args.env_file)
    setup_logging(args.log_level)

    logger.info("=" * 60)
    logger.info("TTS Comparison Service")
    logger.info("=" * 60)

    if args.dry_run:
        logger.info("DRY RUN MODE: Testing configuration...")
        for line in describe_configuration():
            logger.info(line)
        logger.info("Configuration test passed!")
        return

    app = create_app(settings)
    config = uvicorn.Config(
        app,
        host=args.host or settings.server.host,
        port=args.port or settings.server.port,
        log_level=(args.log_level or settings.log_level).lower(),
    )
    server = uvicorn.Server(config)

    try:
        await server.serve()
    finally:
        logger.info("Application exited")


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        print("\nApplication interrupted by user")
        sys.exit(0)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    run()
