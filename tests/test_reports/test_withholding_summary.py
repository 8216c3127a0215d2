"""Tests for the withholding summary report."""

from decimal import Decimal

import pytest

from withholding.engines.calculator import calculate
from withholding.models.enums import CalculationMode
from withholding.models.inputs import Job, Settings
from withholding.reports.summary import WithholdingSummaryGenerator


@pytest.fixture
def generator():
    return WithholdingSummaryGenerator()


class TestWithholdingSummary:
    def test_progressive_report(
        self, generator, mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj
    ):
        res = calculate(mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj)
        text = generator.render(res, federal_mfj, california_mfj)

        assert "WITHHOLDING SUMMARY" in text
        assert "Married Filing Jointly" in text
        assert "Progressive brackets" in text
        assert "$27,228.00" in text
        assert "$10,446.84" in text
        assert "TOTAL ADDITIONAL NEEDED:     $4,674.84" in text
        assert "Effective tax rate:          18.8%" in text
        assert "$2,256.13" in text
        assert "FEDERAL BRACKETS (marginal rate 22.0%)" in text
        assert "CALIFORNIA BRACKETS (marginal rate 9.3%)" in text
        assert "$0 - $23,850: $2,385.00" in text
        assert "$23,850 - $96,950: $8,772.00" in text
        assert "Tax year: 2025" in text
        assert "and up" in text
        assert "covers the estimated liability" not in text
        assert "MHS surtax" not in text

    def test_flat_mode_has_no_bracket_section(
        self, generator, your_jobs, spouse_jobs, federal_mfj, california_mfj
    ):
        res = calculate(
            Settings(mode=CalculationMode.FLAT_TOP), your_jobs, spouse_jobs, federal_mfj, california_mfj
        )
        text = generator.render(res, federal_mfj, california_mfj)
        assert "Flat top rate (worst case)" in text
        assert "FEDERAL BRACKETS" not in text
        assert "$62,900.00" in text

    def test_surtax_line(self, generator, federal_mfj, california_mfj):
        jobs = [Job(gross=Decimal("1500000"))]
        res = calculate(
            Settings(california_surtax_enabled=True), jobs, [], federal_mfj, california_mfj
        )
        text = generator.render(res, federal_mfj, california_mfj)
        assert "incl. MHS surtax:        $4,889.20" in text

    def test_sufficient_withholding(self, generator, federal_mfj, california_mfj):
        jobs = [Job(gross=Decimal("100000"), fed_withheld=Decimal("50000"), state_withheld=Decimal("20000"))]
        res = calculate(Settings(), jobs, [], federal_mfj, california_mfj)
        text = generator.render(res, federal_mfj, california_mfj)
        assert "Current withholding covers the estimated liability." in text
        assert "TOTAL ADDITIONAL NEEDED:     $0.00" in text
