"""Calculation output models. Derived on every run, never stored on their own."""

from decimal import Decimal

from pydantic import BaseModel

from withholding.models.enums import CalculationMode, FilingStatus

SUFFICIENT_TOLERANCE = Decimal("0.01")


class PartnerBreakdown(BaseModel):
    gross: Decimal
    fed_withheld: Decimal
    state_withheld: Decimal
    total_withheld: Decimal
    effective_withholding_rate: Decimal  # total_withheld / gross
    income_share: Decimal  # gross / household gross
    fair_share_of_tax: Decimal
    shortfall: Decimal  # fair share - total withheld; positive = under-withheld


class BracketSegment(BaseModel):
    """How much of the taxable income falls in one bracket."""

    floor: Decimal
    ceiling: Decimal | None
    rate: Decimal
    income_in_bracket: Decimal
    tax_in_bracket: Decimal
    fill: Decimal  # 0..1, share of the bracket width used


class TaxResults(BaseModel):
    mode: CalculationMode
    filing_status: FilingStatus
    # Household totals
    total_gross: Decimal
    total_fed_withheld: Decimal
    total_state_withheld: Decimal
    # Taxable income
    federal_taxable_income: Decimal
    state_taxable_income: Decimal
    # Liability
    federal_tax: Decimal
    state_surtax: Decimal
    state_tax: Decimal  # includes state_surtax
    total_tax: Decimal
    # Additional amount needed on top of withholding
    federal_additional_needed: Decimal
    state_additional_needed: Decimal
    total_additional_needed: Decimal
    # Per-partner
    you: PartnerBreakdown
    spouse: PartnerBreakdown
    effective_tax_rate: Decimal

    @property
    def is_sufficient(self) -> bool:
        return self.total_additional_needed < SUFFICIENT_TOLERANCE
