from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from .changelog import ChangelogEntry, is_newer, list_versions, lookup_changelog, parse_changelog
from .config import Config
from .sources import fetch_remote_changelog, read_installed_version, read_local_changelog


SOURCE_LOCAL = "local"
SOURCE_REMOTE = "remote"

MISSING_INSTALL_MESSAGE = "Could not locate installation or CHANGELOG.md"


@dataclass
class ChangelogDetails:
    success: bool
    message: str
    changelog: Optional[ChangelogEntry] = None
    source: Optional[str] = None


@dataclass
class ChangelogVersionsDetails:
    success: bool
    message: str
    versions: List[str] = field(default_factory=list)
    source: Optional[str] = None


async def get_changelog(
    cfg: Config,
    version: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ChangelogDetails:
    """
    Changelog entry for ``version``, or the latest one.

    A version newer than the installed one cannot be in the local
    CHANGELOG.md, so it is looked up in the remote copy only. If that fetch
    fails the call fails; it does not fall back to the local file.
    """
    try:
        installed = read_installed_version(cfg) if version else None
        if version and installed and is_newer(version, installed):
            logging.info(f"Version {version} is newer than installed {installed}, using remote changelog")
            text = await fetch_remote_changelog(cfg.changelog_url, cfg.fetch_timeout, transport=transport)
            if text is None:
                return ChangelogDetails(
                    success=False,
                    message=f"Version {version} is newer than installed ({installed}) and remote fetch failed.",
                )
            result = lookup_changelog(text, version)
            if not result.success:
                return ChangelogDetails(success=False, message=result.message, source=SOURCE_REMOTE)
            return ChangelogDetails(
                success=True,
                message=f"{result.message} (from remote)",
                changelog=result.changelog,
                source=SOURCE_REMOTE,
            )

        local = read_local_changelog(cfg)
        if local is None:
            return ChangelogDetails(success=False, message=MISSING_INSTALL_MESSAGE)

        result = lookup_changelog(local.content, version)
        if not result.success:
            return ChangelogDetails(success=False, message=result.message)
        return ChangelogDetails(
            success=True,
            message=result.message,
            changelog=result.changelog,
            source=SOURCE_LOCAL,
        )
    except Exception as e:
        logging.error(f"Error reading changelog: {e}", exc_info=True)
        return ChangelogDetails(success=False, message=f"Error reading changelog: {e}")


def get_changelog_versions(cfg: Config) -> ChangelogVersionsDetails:
    try:
        local = read_local_changelog(cfg)
        if local is None:
            return ChangelogVersionsDetails(success=False, message=MISSING_INSTALL_MESSAGE)

        result = list_versions(parse_changelog(local.content))
        if not result.success:
            return ChangelogVersionsDetails(success=False, message=result.message)
        return ChangelogVersionsDetails(
            success=True,
            message=result.message,
            versions=result.versions,
            source=SOURCE_LOCAL,
        )
    except Exception as e:
        logging.error(f"Error reading changelog: {e}", exc_info=True)
        return ChangelogVersionsDetails(success=False, message=f"Error reading changelog: {e}")


def format_changelog_text(details: ChangelogDetails) -> str:
    if not details.success or details.changelog is None:
        return details.message
    entry = details.changelog
    return f"{details.message}\n\n## {entry.version}\n\n{entry.content}"


def format_versions_text(details: ChangelogVersionsDetails) -> str:
    if not details.success:
        return details.message
    return f"{len(details.versions)} versions available:\n{', '.join(details.versions)}"
