from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from .config import Config


CHANGELOG_FILENAME = "CHANGELOG.md"


@dataclass
class LocalChangelog:
    content: str
    install_path: Path


def find_installation(cfg: Config) -> Optional[Path]:
    path = Path(cfg.install_dir).expanduser()
    if not path.is_dir():
        logging.debug(f"Installation directory {path} does not exist")
        return None
    return path


def read_local_changelog(cfg: Config) -> Optional[LocalChangelog]:
    install_path = find_installation(cfg)
    if install_path is None:
        return None
    changelog_path = install_path / CHANGELOG_FILENAME
    if not changelog_path.is_file():
        logging.warning(f"No {CHANGELOG_FILENAME} found in {install_path}")
        return None
    content = changelog_path.read_text(encoding="utf-8")
    logging.info(f"Read local changelog from {changelog_path} ({len(content)} chars)")
    return LocalChangelog(content=content, install_path=install_path)


def read_installed_version(cfg: Config) -> Optional[str]:
    """
    Version of the local installation.

    An explicit PI_INSTALLED_VERSION wins, otherwise the "version" field of
    package.json in the install directory is used. Returns None if neither
    is available.
    """
    if cfg.installed_version:
        return cfg.installed_version
    install_path = find_installation(cfg)
    if install_path is None:
        return None
    package_json = install_path / "package.json"
    if not package_json.is_file():
        return None
    try:
        data = json.loads(package_json.read_text(encoding="utf-8"))
    except ValueError as e:
        logging.warning(f"Could not parse {package_json}: {e}")
        return None
    version = data.get("version") if isinstance(data, dict) else None
    return version if isinstance(version, str) and version else None


async def fetch_remote_changelog(
    url: str, timeout: float = 30, transport: Optional[httpx.AsyncBaseTransport] = None
) -> Optional[str]:
    """Best-effort fetch; returns None instead of raising on HTTP failures."""
    logging.info(f"Fetching changelog from {url}")
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url)
            resp.raise_for_status()
    except httpx.HTTPError as e:
        logging.warning(f"Remote changelog fetch failed: {e}")
        return None
    logging.info(f"Successfully fetched changelog ({len(resp.text)} chars)")
    return resp.text
