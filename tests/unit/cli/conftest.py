"""
Fixtures for CLI tests: a runner and an in-memory repository injected
through the click context object.
"""

import json

import pytest
from click.testing import CliRunner

from nippou.cli.main import cli
from nippou.infrastructure.storage import InMemoryReportRepository


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def repository():
    return InMemoryReportRepository()


@pytest.fixture
def invoke(runner, repository, restore_logging):
    """Run the CLI against the shared in-memory repository."""

    def _invoke(*args, **kwargs):
        return runner.invoke(cli, list(args), obj={"repository": repository}, **kwargs)

    return _invoke


@pytest.fixture
def created(invoke):
    """Create a report through the CLI and return its JSON output."""
    result = invoke(
        "create", "-d", "2026-01-08", "-m", "Visited the Osaka office", "-t", "sales", "--json"
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.output)
