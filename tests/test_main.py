"""Tests for the pi-changelog command line."""

import asyncio
import logging
from contextlib import contextmanager

import pytest

from pi_changelog.main import LOG_FORMAT, async_main, parse_args


def run(argv):
    return asyncio.run(async_main(argv))


def test_parse_args_defaults():
    args = parse_args([])
    assert args.version is None
    assert args.list_versions is False
    assert args.log_level is None


def test_latest(install_dir, capsys):
    assert run([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Latest changelog entry: 1.2.0\n\n## 1.2.0\n\n### Added")


def test_specific_version(install_dir, capsys):
    assert run(["--version", "1.1.0"]) == 0
    assert "Found changelog for version 1.1.0" in capsys.readouterr().out


def test_not_found_exit_code(install_dir, capsys):
    assert run(["-v", "0.1.0"]) == 1
    assert "Available: 1.2.0, 1.1.0, 1.0.0" in capsys.readouterr().out


def test_list_versions(install_dir, capsys):
    assert run(["--list"]) == 0
    assert capsys.readouterr().out == "3 versions available:\n1.2.0, 1.1.0, 1.0.0\n"


def test_list_versions_missing_install(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("PI_INSTALL_DIR", str(tmp_path / "missing"))
    assert run(["--list"]) == 1
    assert "Could not locate installation" in capsys.readouterr().out


@pytest.mark.parametrize(
    "name,value",
    [("CHANGELOG_FETCH_TIMEOUT", "-1"), ("CHANGELOG_FETCH_TIMEOUT", "later")],
)
def test_bad_config_exit_code(install_dir, monkeypatch, caplog, name, value):
    monkeypatch.setenv(name, value)
    assert run([]) == 2
    assert "Configuration error" in caplog.text


@contextmanager
def unconfigured_root_logger():
    """Run with no root handlers so basicConfig behaves as in a fresh process."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        yield root
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)


@pytest.mark.parametrize(
    "argv,env_level,expected",
    [
        ([], None, logging.WARNING),
        (["--log-level", "DEBUG"], None, logging.DEBUG),
        ([], "info", logging.INFO),
        (["--log-level", "error"], "debug", logging.ERROR),
    ],
)
def test_logging_configuration(install_dir, monkeypatch, argv, env_level, expected):
    if env_level:
        monkeypatch.setenv("LOG_LEVEL", env_level)
    with unconfigured_root_logger() as root:
        assert run(argv) == 0
        level = root.level
        formats = [h.formatter._fmt for h in root.handlers if h.formatter]
    assert level == expected
    assert formats == [LOG_FORMAT]
