"""
Fixtures for use case tests.
"""

import pytest

from nippou.infrastructure.storage import InMemoryReportRepository
from nippou.usecase import CreateReportInput, CreateReportUseCase


@pytest.fixture
def repository(fixed_clock):
    return InMemoryReportRepository(clock=fixed_clock)


@pytest.fixture
def create_use_case(repository, id_generator, fixed_clock):
    return CreateReportUseCase(repository, id_generator=id_generator, clock=fixed_clock)


@pytest.fixture
def stored_report(create_use_case, fixed_clock):
    """Output of a report saved through the create use case."""
    output = create_use_case.execute(
        CreateReportInput(date="2026-01-08", content="Visited the Osaka office", tags=["sales"])
    )
    fixed_clock.advance(minutes=10)
    return output
