"""
GitHub PR Generator - command line entry point.

Usage:
    github-pr-generator --interactive [--env-file .env.local] [--log-level DEBUG]

Environment Variables (required):
    GITHUB_OWNER - Owner of the target repository
    GITHUB_REPO - Name of the target repository
    GOOGLE_API_KEY - Google API key for the Gemini chat model

Optional Environment Variables:
    GITHUB_TOKEN - GitHub personal access token (unauthenticated otherwise)
    LLM_MODEL - Chat model name (default: gemini-2.5-flash)
    LLM_TEMPERATURE - Sampling temperature (default: 0.1)
    BRANCH_PREFIX - Prefix for generated branch names (default: feature/)
    LOG_LEVEL - Logging level when --log-level is not given (default: INFO)
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional
from loguru import logger

from . import __version__
from .config import Config
from .exceptions import ConfigurationError
from .pipeline import PullRequestGenerator

USAGE = """
Usage:
    github-pr-generator --interactive    Start in interactive mode
"""


def setup_logging(log_level: str = "INFO") -> None:
    """Setup Loguru-based logging."""
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level.upper(),
        format="<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
               "<level>{level: <8}</level> | "
               "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        colorize=True,
    )
    logger.debug(f"Log level set to {log_level.upper()}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a GitHub pull request from a natural-language change request",
        epilog="""
Examples:
    github-pr-generator --interactive                       # Use .env.local / .env
    github-pr-generator --interactive --env-file prod.env   # Use custom environment file
    github-pr-generator --interactive --log-level DEBUG     # Show every fetched item
        """,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "--interactive",
        action="store_true",
        help="Prompt for a change request and open a pull request for it"
    )

    parser.add_argument(
        "--env-file",
        type=str,
        help="Path to environment file (default: .env.local, then .env)"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"GitHub PR Generator {__version__}"
    )

    return parser.parse_args(argv)


def _run_async(coro):
    """
    Run a coroutine to completion on a fresh event loop.

    Unlike asyncio.run this keeps the default SIGINT handler, so Ctrl+C
    raises KeyboardInterrupt even while the requirement prompt blocks on stdin.
    """
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    args = parse_arguments(argv)

    if not args.interactive:
        print(USAGE)
        return 0

    setup_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"))

    try:
        config = Config(env_file=args.env_file)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e.message}")
        for var in e.details.get("missing_environment_variables", []):
            logger.error(f"  - {var}")
        return 1

    # LOG_LEVEL may only have been defined in the env file
    if args.log_level is None:
        setup_logging(config.log_level)

    try:
        result = _run_async(PullRequestGenerator(config).run())
    except KeyboardInterrupt:
        logger.info("Cancelled by user")
        return 130

    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
