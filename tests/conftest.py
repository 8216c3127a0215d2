"""Shared test fixtures for the withholding planner."""

from decimal import Decimal

import pytest

from withholding.engines.brackets import default_california_brackets, default_federal_brackets
from withholding.models.brackets import BracketTable
from withholding.models.enums import FilingStatus
from withholding.models.inputs import Job, Settings


@pytest.fixture
def mfj_settings() -> Settings:
    return Settings.for_filing_status(FilingStatus.MFJ)


@pytest.fixture
def federal_mfj() -> BracketTable:
    return default_federal_brackets()[FilingStatus.MFJ]


@pytest.fixture
def california_mfj() -> BracketTable:
    return default_california_brackets()[FilingStatus.MFJ]


@pytest.fixture
def your_jobs() -> list[Job]:
    return [
        Job(
            id="you-1",
            name="Acme Corp",
            gross=Decimal("120000"),
            fed_withheld=Decimal("16000"),
            state_withheld=Decimal("5000"),
        ),
        Job(
            id="you-2",
            name="Consulting",
            gross=Decimal("30000"),
            fed_withheld=Decimal("4000"),
            state_withheld=Decimal("1000"),
        ),
    ]


@pytest.fixture
def spouse_jobs() -> list[Job]:
    return [
        Job(
            id="spouse-1",
            name="School District",
            gross=Decimal("50000"),
            fed_withheld=Decimal("5000"),
            state_withheld=Decimal("2000"),
        ),
    ]
