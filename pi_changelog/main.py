from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from .config import Config
from .tools import format_changelog_text, format_versions_text, get_changelog, get_changelog_versions


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging() -> None:
    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # Reduce httpx logging noise
    logging.getLogger('httpx').setLevel(logging.WARNING)


def set_log_level(level: str) -> None:
    logging.getLogger().setLevel(getattr(logging, level.upper(), logging.WARNING))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="pi-changelog",
        description="Show the changelog entry for a Pi version (latest by default).",
    )
    parser.add_argument(
        "-v", "--version",
        dest="version",
        help="Specific version to show. Versions newer than the installed one are read from the remote changelog.",
    )
    parser.add_argument(
        "-l", "--list",
        dest="list_versions",
        action="store_true",
        help="List all versions in the local changelog",
    )
    parser.add_argument("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


async def async_main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging()
    if args.log_level:
        set_log_level(args.log_level)

    try:
        cfg = Config()
        cfg.validate()
    except (RuntimeError, ValueError) as e:
        logging.error(f"Configuration error: {e}")
        return 2

    set_log_level(args.log_level or cfg.log_level)

    if args.list_versions:
        versions = get_changelog_versions(cfg)
        print(format_versions_text(versions))
        return 0 if versions.success else 1

    details = await get_changelog(cfg, args.version)
    if details.success:
        logging.info(f"Resolved changelog {details.changelog.version} from {details.source}")
    print(format_changelog_text(details))
    return 0 if details.success else 1


def main() -> None:
    raise SystemExit(asyncio.run(async_main()))


if __name__ == "__main__":
    main()
