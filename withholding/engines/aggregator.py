"""Job aggregation: partner and household totals, taxable income per jurisdiction."""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal

from withholding.models.inputs import Job, Settings, to_decimal

ZERO = Decimal("0")


@dataclass(frozen=True)
class JobTotals:
    """Gross and withholding summed over a list of jobs."""

    gross: Decimal = ZERO
    fed_withheld: Decimal = ZERO
    state_withheld: Decimal = ZERO

    @property
    def total_withheld(self) -> Decimal:
        return self.fed_withheld + self.state_withheld


@dataclass(frozen=True)
class HouseholdTotals:
    total_gross: Decimal
    total_fed_withheld: Decimal
    total_state_withheld: Decimal
    federal_taxable_income: Decimal
    state_taxable_income: Decimal


def sum_jobs(jobs: Iterable[Job]) -> JobTotals:
    """Sum one partner's jobs. Malformed amounts count as zero."""
    gross = ZERO
    fed_withheld = ZERO
    state_withheld = ZERO
    for job in jobs:
        gross += to_decimal(job.gross)
        fed_withheld += to_decimal(job.fed_withheld)
        state_withheld += to_decimal(job.state_withheld)
    return JobTotals(gross=gross, fed_withheld=fed_withheld, state_withheld=state_withheld)


def taxable_income(gross: Decimal, standard_deduction: Decimal, other_adjustments: Decimal) -> Decimal:
    """Gross less the standard deduction and other adjustments, floored at zero."""
    return max(
        gross - to_decimal(standard_deduction) - to_decimal(other_adjustments), ZERO
    )


def aggregate(settings: Settings, you: Iterable[Job], spouse: Iterable[Job]) -> HouseholdTotals:
    """Household totals over both partners' jobs and the taxable income bases."""
    household = sum_jobs([*you, *spouse])
    return HouseholdTotals(
        total_gross=household.gross,
        total_fed_withheld=household.fed_withheld,
        total_state_withheld=household.state_withheld,
        federal_taxable_income=taxable_income(
            household.gross,
            settings.federal_standard_deduction,
            settings.other_adjustments,
        ),
        state_taxable_income=taxable_income(
            household.gross,
            settings.state_standard_deduction,
            settings.other_adjustments,
        ),
    )
