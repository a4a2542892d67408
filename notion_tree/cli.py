"""
Notion Tree - Main Entry Point

Command line interface for generating the workspace tree.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

from notion_tree.config import get_settings
from notion_tree.pipeline.run_pipeline import TreeRunner


EXIT_INTERRUPTED = 130

EPILOG = """\
Examples:
  notion-tree                           # Display tree in console
  notion-tree -f markdown               # Export tree to markdown
  notion-tree -f all -o my-notion-tree  # Console, markdown and json with custom filename
  notion-tree -d 2                      # Limit tree depth to 2 levels
  notion-tree -f markdown -u            # Export to markdown with clickable URLs
  notion-tree -a                        # Generate ASCII tree markdown (like console output)
"""


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid depth: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"depth must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notion-tree",
        description="Generate a tree structure of your Notion pages and databases.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-f", "--format",
        choices=["console", "markdown", "json", "all"],
        default=None,
        help="Output format (default: console)",
    )
    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Output file path without extension (default: notion-tree-{timestamp})",
    )
    parser.add_argument(
        "-d", "--max-depth",
        type=non_negative_int,
        default=None,
        help="Maximum depth to traverse, roots are depth 0 (default: unlimited)",
    )
    parser.add_argument(
        "-u", "--include-urls",
        action="store_true",
        default=None,
        help="Include URLs in the output",
    )
    parser.add_argument(
        "-a", "--ascii",
        action="store_true",
        default=None,
        help="Generate an ASCII tree markdown file",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Disable the progress spinner and status messages",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Log level (default: from env)",
    )
    return parser


def configure_logging(level: str) -> None:
    """Send log records to stderr above any live spinner."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(max(logging.getLevelName(level), logging.WARNING))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log.level)

    runner = TreeRunner(settings)
    try:
        return asyncio.run(
            runner.run(
                fmt=args.format,
                ascii_tree=args.ascii,
                max_depth=args.max_depth,
                include_urls=args.include_urls,
                output=args.output,
                quiet=args.quiet,
            )
        )
    except KeyboardInterrupt:
        Console(stderr=True).print("Interrupted.", style="yellow")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
