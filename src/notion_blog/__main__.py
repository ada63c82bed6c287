# ABOUTME: CLI entry point for notion-blog.
# ABOUTME: Provides the 'generate' command.

import argparse
import logging
from logging.handlers import RotatingFileHandler
import sys
import time
from pathlib import Path

from notion_client.errors import HTTPResponseError, RequestTimeoutError

from .config import load_config, ConfigError, BlogConfig
from .notion import NotionClient, fetch_page_with_blocks
from .markdown import ArchetypeError, PostWriter, get_page_title
from .ratelimit import RateLimiter

DEFAULT_CONFIG_PATH = Path("notion-blog.yaml")


def setup_logging(log_path: Path | None = None, verbose: bool = False) -> None:
    """Configure logging for the application.

    Args:
        log_path: Optional path for log file. If provided, enables rotating file logging.
        verbose: Log debug messages.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    # File handler with rotation (if log_path provided)
    if log_path:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def generate_post(config: BlogConfig, page_id: str, output: Path | None = None) -> Path:
    """Fetch a page from Notion and write it as a post.

    Args:
        config: Blog configuration.
        page_id: ID of the Notion page.
        output: Destination file; defaults to the configured content folder.

    Returns:
        Path of the written post.
    """
    logger = logging.getLogger(__name__)
    start = time.monotonic()

    client = NotionClient(config.get_token(), RateLimiter(calls_per_second=2.5))
    data = fetch_page_with_blocks(client, page_id)
    title = get_page_title(data.page)
    logger.info(f"Generating post '{title}' ({page_id})")

    path = PostWriter(config).write_post(data.page, data.blocks, output)

    logger.info(f"Generated '{title}' in {time.monotonic() - start:.1f}s")
    return path


def cmd_generate(args: argparse.Namespace) -> None:
    """Generate a post from a single page."""
    logger = logging.getLogger(__name__)

    try:
        config = load_config(args.config)
        generate_post(config, args.page_id, args.output)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)
    except ArchetypeError as e:
        logger.error(f"Archetype error: {e}")
        sys.exit(1)
    except (HTTPResponseError, RequestTimeoutError) as e:
        logger.error(f"Failed to fetch page {args.page_id}: {e}")
        sys.exit(1)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="notion-blog",
        description="Generate static site posts from Notion pages",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug messages",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # generate command
    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate a post from a Notion page",
    )
    generate_parser.add_argument("page_id", help="ID of the Notion page")
    generate_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: derived from the page title)",
    )

    args = parser.parse_args()

    # Log next to the config file
    log_path = args.config.parent / "logs" / "notion-blog.log"
    setup_logging(log_path, args.verbose)

    if args.command == "generate":
        cmd_generate(args)


if __name__ == "__main__":
    main()
