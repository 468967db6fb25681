"""
Pytest configuration and shared fixtures for nippou tests.
"""

import logging
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from nippou.logging import logging_manager
from nippou.models import ReportBuilder, ReportId


class FixedClock:
    """Clock returning a settable instant; ``advance`` moves it forward."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class SequentialIdGenerator:
    """Deterministic UUIDs: 00000000-0000-4000-8000-000000000001, ..."""

    def __init__(self):
        self.counter = 0

    def generate(self) -> ReportId:
        self.counter += 1
        return ReportId(f"00000000-0000-4000-8000-{self.counter:012d}")


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def config_file(temp_dir):
    """Config file path inside a temporary config directory."""
    config_dir = temp_dir / ".config" / "nippou"
    config_dir.mkdir(parents=True)
    return config_dir / "config.toml"


@pytest.fixture
def fixed_clock():
    return FixedClock(datetime(2026, 1, 8, 9, 30, tzinfo=timezone.utc))


@pytest.fixture
def id_generator():
    return SequentialIdGenerator()


@pytest.fixture
def build_report(fixed_clock, id_generator):
    """Factory building reports with the deterministic clock and ids."""

    def _build(date_text="2026-01-08", content="Visited the Osaka office", **kwargs):
        builder = ReportBuilder(date_text, content, **kwargs)
        return builder.with_clock(fixed_clock).with_id_generator(id_generator).build()

    return _build


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Isolate tests from NIPPOU_* variables and the user's home directory."""
    for var in list(os.environ):
        if var.startswith("NIPPOU_"):
            monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    yield


@pytest.fixture
def restore_logging():
    """Undo handlers and levels installed through the logging manager."""
    root = logging.getLogger()
    nippou_logger = logging.getLogger("nippou")
    root_level, nippou_level = root.level, nippou_logger.level
    yield
    for handler in logging_manager.handlers:
        root.removeHandler(handler)
        handler.close()
    logging_manager.handlers.clear()
    root.setLevel(root_level)
    nippou_logger.setLevel(nippou_level)


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
