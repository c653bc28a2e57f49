from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional


HEADING_RE = re.compile(r"^#+\s*(?:\[(?P<bracketed>[^\]]+)\]|(?P<bare>[^\[\s]+))")
VERSION_RE = re.compile(r"^v?\d+\.\d+")
# Lines made only of separator characters
DECORATION_RE = re.compile(r"^(?:-+|=+|\*+|#+)\r?$", re.MULTILINE)

EMPTY_ENTRY_PLACEHOLDER = "[Empty changelog entry - no details provided for this version]"
MIN_CONTENT_LENGTH = 10

NO_ENTRIES = "no_entries"
VERSION_NOT_FOUND = "version_not_found"


@dataclass(frozen=True)
class ChangelogEntry:
    version: str
    content: str


@dataclass
class ResolutionResult:
    success: bool
    message: str
    changelog: Optional[ChangelogEntry] = None
    error: Optional[str] = None
    available: List[str] = field(default_factory=list)


@dataclass
class VersionsResult:
    success: bool
    message: str
    versions: List[str] = field(default_factory=list)


def match_heading(line: str) -> Optional[str]:
    """Return the heading token of a markdown heading line, or None."""
    m = HEADING_RE.match(line.strip())
    if not m:
        return None
    return m.group("bracketed") or m.group("bare")


def looks_like_version(token: str) -> bool:
    return bool(VERSION_RE.match(token))


def _entry_content(lines: List[str]) -> str:
    raw = "\n".join(lines).strip()
    # Decoration only decides emptiness, the stored text keeps it
    clean = DECORATION_RE.sub("", raw).strip()
    if len(clean) < MIN_CONTENT_LENGTH:
        return EMPTY_ENTRY_PLACEHOLDER
    return raw


def parse_changelog(markdown: str) -> List[ChangelogEntry]:
    """
    Split a changelog into one entry per version heading.

    Any heading level counts (``#``, ``##``, ...) as long as its token looks
    like ``MAJOR.MINOR``, bracketed or not. Other headings are ordinary body
    text. Entries come back in document order, which by convention is
    newest-first; they are not re-sorted.
    """
    lines = markdown.split("\n")
    starts: List[tuple[int, str]] = []

    for i, line in enumerate(lines):
        if not line:
            continue
        token = match_heading(line)
        if token and looks_like_version(token):
            starts.append((i, token))

    entries: List[ChangelogEntry] = []
    for idx, (start, version) in enumerate(starts):
        end = starts[idx + 1][0] if idx + 1 < len(starts) else len(lines)
        entries.append(ChangelogEntry(version=version, content=_entry_content(lines[start + 1:end])))

    return entries


def normalize_version(version: str) -> str:
    return version[1:] if version.startswith("v") else version


def find_entry(entries: List[ChangelogEntry], requested: Optional[str] = None) -> ResolutionResult:
    """
    Pick the entry for ``requested``, or the first (latest) entry when no
    version is asked for.

    Matching tolerates a missing or extra leading ``v`` on either side, since
    changelogs are not consistent about it. The first match in document
    order wins.
    """
    if not entries:
        return ResolutionResult(success=False, message="No version entries found", error=NO_ENTRIES)

    if not requested:
        latest = entries[0]
        return ResolutionResult(
            success=True,
            message=f"Latest changelog entry: {latest.version}",
            changelog=latest,
        )

    wanted = normalize_version(requested)
    for entry in entries:
        if (
            entry.version == requested
            or entry.version == f"v{wanted}"
            or normalize_version(entry.version) == wanted
        ):
            return ResolutionResult(
                success=True,
                message=f"Found changelog for version {entry.version}",
                changelog=entry,
            )

    available = [e.version for e in entries]
    return ResolutionResult(
        success=False,
        message=f"Version {requested} not found. Available: {', '.join(available)}",
        error=VERSION_NOT_FOUND,
        available=available,
    )


def lookup_changelog(markdown: str, requested: Optional[str] = None) -> ResolutionResult:
    return find_entry(parse_changelog(markdown), requested)


def list_versions(entries: List[ChangelogEntry]) -> VersionsResult:
    if not entries:
        return VersionsResult(success=False, message="No version entries found in changelog")
    versions = [e.version for e in entries]
    return VersionsResult(success=True, message=f"Found {len(versions)} versions", versions=versions)


def _version_part(part: str) -> int:
    part = part.strip()
    return int(part) if part.isdecimal() else 0


def is_newer(requested: str, installed: str) -> bool:
    """True when ``requested`` is a later version than ``installed``.

    Compares dot-separated numeric components left to right. Missing trailing
    components count as 0 and so do components that are not numbers, so
    ``1.2`` equals ``1.2.0`` and malformed strings never raise.
    """
    req = normalize_version(requested)
    inst = normalize_version(installed)
    if req == inst:
        return False

    req_parts = [_version_part(p) for p in req.split(".")]
    inst_parts = [_version_part(p) for p in inst.split(".")]
    for i in range(max(len(req_parts), len(inst_parts))):
        r = req_parts[i] if i < len(req_parts) else 0
        n = inst_parts[i] if i < len(inst_parts) else 0
        if r > n:
            return True
        if r < n:
            return False
    return False
