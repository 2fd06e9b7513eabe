"""Entry point for running the CLI as a module."""

import argparse
import asyncio
import sys

from .talkql_cli import main


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Chat with your connected database through the TalkQL service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--base-url",
        type=str,
        default=None,
        help="Query service base URL (default: from config, http://localhost:8000)",
    )
    parser.add_argument(
        "--db-type",
        type=str,
        default=None,
        help="Database type handed off from a prior connection step",
    )
    parser.add_argument(
        "--db-name",
        type=str,
        default=None,
        help="Database name handed off from a prior connection step",
    )
    parser.add_argument(
        "--viz",
        action="store_true",
        help="Start with visualizations enabled",
    )
    parser.add_argument(
        "--tabular",
        action="store_true",
        help="Start with tabular output enabled",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def cli_entry() -> None:
    """CLI entry point."""
    args = parse_args()

    try:
        asyncio.run(
            main(
                base_url=args.base_url,
                db_type=args.db_type,
                db_name=args.db_name,
                visualization=args.viz,
                tabular=args.tabular,
                debug=args.debug,
            )
        )
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()
