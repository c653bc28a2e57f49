"""
Shared fixtures for pi-changelog tests.

Every test gets a clean environment for the variables Config reads, and
load_dotenv is disabled so a developer's .env file cannot leak in.
"""

from unittest.mock import patch

import pytest


CONFIG_ENV_VARS = (
    "CHANGELOG_URL",
    "PI_INSTALL_DIR",
    "PI_INSTALLED_VERSION",
    "CHANGELOG_FETCH_TIMEOUT",
    "LOG_LEVEL",
)

LOCAL_CHANGELOG = """# Changelog

## [Unreleased]

## 1.2.0

### Added
- The versions listing

## 1.1.0

### Fixed
- Crash when the changelog was empty

## 1.0.0
---
"""

REMOTE_CHANGELOG = LOCAL_CHANGELOG.replace(
    "## [Unreleased]\n",
    "## [Unreleased]\n\n## 1.3.0\n\n### Added\n- Remote lookups for newer versions\n",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    with patch("pi_changelog.config.load_dotenv"):
        yield


@pytest.fixture
def install_dir(tmp_path, monkeypatch):
    """An installation directory holding CHANGELOG.md and package.json."""
    (tmp_path / "CHANGELOG.md").write_text(LOCAL_CHANGELOG, encoding="utf-8")
    (tmp_path / "package.json").write_text('{"name": "pi", "version": "1.2.0"}', encoding="utf-8")
    monkeypatch.setenv("PI_INSTALL_DIR", str(tmp_path))
    return tmp_path
