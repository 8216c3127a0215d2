"""Tests for the end-to-end withholding calculation.

Household: $150k (you, two jobs) + $50k (spouse), MFJ 2025 defaults.
  Federal taxable: 200000 - 30000 = 170000
    2385 + 8772 + 73050 x 22% = 27228
  California taxable: 200000 - 11080 = 188920
    221.58 + 607.40 + 1215.04 + 1930.80 + 2429.12 + 43472 x 9.3% = 10446.836
"""

from decimal import Decimal

import pytest

from withholding.engines.calculator import WithholdingCalculator, calculate
from withholding.models.enums import CalculationMode, FilingStatus
from withholding.models.inputs import Job, Settings
from withholding.models.state import CalculatorState

TOLERANCE = Decimal("0.000001")


@pytest.fixture
def results(mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj):
    return calculate(mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj)


class TestProgressiveMode:
    def test_totals(self, results):
        assert results.total_gross == Decimal("200000")
        assert results.total_fed_withheld == Decimal("25000")
        assert results.total_state_withheld == Decimal("8000")

    def test_liabilities(self, results):
        assert results.federal_taxable_income == Decimal("170000")
        assert results.state_taxable_income == Decimal("188920")
        assert results.federal_tax == Decimal("27228")
        assert results.state_tax == Decimal("10446.836")
        assert results.state_surtax == Decimal("0")
        assert results.total_tax == Decimal("37674.836")

    def test_additional_needed(self, results):
        assert results.federal_additional_needed == Decimal("2228")
        assert results.state_additional_needed == Decimal("2446.836")
        assert results.total_additional_needed == Decimal("4674.836")
        assert not results.is_sufficient

    def test_effective_tax_rate(self, results):
        assert results.effective_tax_rate == Decimal("0.18837418")

    def test_partner_breakdowns(self, results):
        assert results.you.fair_share_of_tax == Decimal("28256.127")
        assert results.you.shortfall == Decimal("2256.127")
        assert results.spouse.fair_share_of_tax == Decimal("9418.709")
        assert results.spouse.shortfall == Decimal("2418.709")

    def test_fair_shares_sum_to_total_tax(self, results):
        total = results.you.fair_share_of_tax + results.spouse.fair_share_of_tax
        assert abs(total - results.total_tax) < TOLERANCE

    def test_idempotent(self, mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj):
        first = calculate(mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj)
        second = calculate(mfj_settings, your_jobs, spouse_jobs, federal_mfj, california_mfj)
        assert first == second


class TestFlatTopMode:
    def test_uses_top_rates(self, your_jobs, spouse_jobs, federal_mfj, california_mfj):
        settings = Settings(mode=CalculationMode.FLAT_TOP)
        r = calculate(settings, your_jobs, spouse_jobs, federal_mfj, california_mfj)
        assert r.federal_tax == Decimal("62900")
        assert r.state_tax == Decimal("23237.160")

    def test_ignores_brackets(self, your_jobs, spouse_jobs):
        settings = Settings(mode=CalculationMode.FLAT_TOP)
        r = calculate(settings, your_jobs, spouse_jobs, [], [])
        assert r.federal_tax == Decimal("62900")

    def test_flat_at_least_progressive(self, your_jobs, spouse_jobs, federal_mfj, california_mfj):
        flat = calculate(
            Settings(mode=CalculationMode.FLAT_TOP), your_jobs, spouse_jobs, federal_mfj, california_mfj
        )
        progressive = calculate(Settings(), your_jobs, spouse_jobs, federal_mfj, california_mfj)
        assert flat.total_tax >= progressive.total_tax


class TestSurtax:
    @pytest.fixture
    def high_earner(self):
        return [Job(gross=Decimal("1500000"))]

    def test_added_above_threshold(self, high_earner, federal_mfj, california_mfj):
        off = calculate(Settings(), high_earner, [], federal_mfj, california_mfj)
        on = calculate(
            Settings(california_surtax_enabled=True), high_earner, [], federal_mfj, california_mfj
        )
        assert on.state_surtax == Decimal("4889.20")
        assert on.state_tax - off.state_tax == Decimal("4889.20")
        assert on.federal_tax == off.federal_tax

    def test_applies_in_flat_mode(self, high_earner):
        settings = Settings(mode=CalculationMode.FLAT_TOP, california_surtax_enabled=True)
        r = calculate(settings, high_earner, [], [], [])
        assert r.state_tax == Decimal("1488920") * Decimal("0.123") + Decimal("4889.20")

    def test_no_change_below_threshold(self, your_jobs, spouse_jobs, federal_mfj, california_mfj):
        off = calculate(Settings(), your_jobs, spouse_jobs, federal_mfj, california_mfj)
        on = calculate(
            Settings(california_surtax_enabled=True), your_jobs, spouse_jobs, federal_mfj, california_mfj
        )
        assert on.state_tax == off.state_tax


class TestEdgeCases:
    def test_no_income(self, federal_mfj, california_mfj):
        r = calculate(Settings(), [Job()], [Job()], federal_mfj, california_mfj)
        assert r.total_tax == Decimal("0")
        assert r.effective_tax_rate == Decimal("0")
        assert r.you.fair_share_of_tax == Decimal("0")
        assert r.is_sufficient

    def test_over_withheld_needs_nothing(self, federal_mfj, california_mfj):
        jobs = [Job(gross=Decimal("100000"), fed_withheld=Decimal("50000"), state_withheld=Decimal("20000"))]
        r = calculate(Settings(), jobs, [], federal_mfj, california_mfj)
        assert r.federal_additional_needed == Decimal("0")
        assert r.state_additional_needed == Decimal("0")
        assert r.is_sufficient
        assert r.you.shortfall < 0

    def test_spouse_without_income(self, your_jobs, federal_mfj, california_mfj):
        r = calculate(Settings(), your_jobs, [Job()], federal_mfj, california_mfj)
        assert r.spouse.effective_withholding_rate == Decimal("0")
        assert r.spouse.fair_share_of_tax == Decimal("0")
        assert r.you.fair_share_of_tax == r.total_tax

    def test_empty_tables_warn(self, your_jobs):
        engine = WithholdingCalculator()
        r = engine.calculate(Settings(), your_jobs, [], [], [])
        assert r.federal_tax == Decimal("0")
        assert len(engine.warnings) == 2


class TestCalculateState:
    def test_selects_tables_for_filing_status(self, your_jobs, spouse_jobs):
        state = CalculatorState.initial()
        state.you = your_jobs
        state.spouse = spouse_jobs
        state.settings = state.settings.with_filing_status(FilingStatus.SINGLE)

        r = WithholdingCalculator().calculate_state(state)
        expected = calculate(
            state.settings,
            your_jobs,
            spouse_jobs,
            state.federal_brackets[FilingStatus.SINGLE],
            state.state_brackets[FilingStatus.SINGLE],
        )
        assert r == expected
        assert r.filing_status == FilingStatus.SINGLE
        assert r.federal_taxable_income == Decimal("185000")
