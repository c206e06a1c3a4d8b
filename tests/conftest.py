"""Pytest configuration and shared fixtures."""

import logging
import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

# Add changelog_release to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


@pytest.fixture(autouse=True)
def isolate_settings(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep user settings and log files out of the real home directory."""
    monkeypatch.setenv("CHANGELOG_RELEASE_CONFIG_DIR", str(tmp_path / "user-config"))
    monkeypatch.delenv("CHANGELOG_RELEASE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("CHANGELOG_RELEASE_LOG_FILE", raising=False)

    yield

    package_logger = logging.getLogger("changelog_release")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def write_changelog(tmp_path: Path) -> Callable[..., Path]:
    """Write changelog text byte for byte (no newline translation)."""

    def _write(text: str, name: str = "CHANGELOG.md") -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
        return path

    return _write


@pytest.fixture
def read_changelog() -> Callable[[Path], str]:
    """Read a changelog byte for byte (no newline translation)."""

    def _read(path: Path) -> str:
        with open(path, encoding="utf-8", newline="") as f:
            return f.read()

    return _read
