"""Withholding shortfall calculator.

Aggregates both partners' jobs, computes federal and California liability
under the selected mode, adds the Mental Health Services surtax when enabled,
and allocates the pooled liability back to each partner.
"""

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING

from withholding.engines.aggregator import aggregate
from withholding.engines.allocator import allocate
from withholding.engines.tax import compute_flat_top_tax, compute_progressive_tax, compute_surtax
from withholding.models.brackets import BracketTable
from withholding.models.enums import CalculationMode
from withholding.models.inputs import Job, Settings
from withholding.models.results import TaxResults

if TYPE_CHECKING:
    from withholding.models.state import CalculatorState

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class WithholdingCalculator:
    """Estimates additional withholding needed for a two-partner household."""

    def __init__(self) -> None:
        self.warnings: list[str] = []

    def calculate(
        self,
        settings: Settings,
        you: Sequence[Job],
        spouse: Sequence[Job],
        federal_brackets: BracketTable,
        state_brackets: BracketTable,
    ) -> TaxResults:
        """Compute a full set of results from one input snapshot."""
        self.warnings = []
        totals = aggregate(settings, you, spouse)

        # --- Base liability ---
        if settings.mode == CalculationMode.FLAT_TOP:
            federal_tax = compute_flat_top_tax(
                totals.federal_taxable_income, settings.federal_top_rate
            )
            state_base = compute_flat_top_tax(
                totals.state_taxable_income, settings.state_top_rate
            )
        else:
            if not federal_brackets:
                self.warnings.append("Federal bracket table is empty. Federal tax is $0.")
            if not state_brackets:
                self.warnings.append("State bracket table is empty. State tax is $0.")
            federal_tax = compute_progressive_tax(
                totals.federal_taxable_income, federal_brackets
            )
            state_base = compute_progressive_tax(
                totals.state_taxable_income, state_brackets
            )

        # --- Surtax applies on top of either mode ---
        state_surtax = (
            compute_surtax(totals.state_taxable_income)
            if settings.california_surtax_enabled
            else ZERO
        )
        state_tax = state_base + state_surtax

        # --- Amount still needed beyond withholding ---
        federal_add = max(federal_tax - totals.total_fed_withheld, ZERO)
        state_add = max(state_tax - totals.total_state_withheld, ZERO)

        total_tax = federal_tax + state_tax
        effective_rate = (
            total_tax / totals.total_gross if totals.total_gross > ZERO else ZERO
        )

        logger.debug(
            "Calculated %s estimate: gross=%s federal=%s state=%s",
            settings.mode.value,
            totals.total_gross,
            federal_tax,
            state_tax,
        )

        return TaxResults(
            mode=settings.mode,
            filing_status=settings.filing_status,
            total_gross=totals.total_gross,
            total_fed_withheld=totals.total_fed_withheld,
            total_state_withheld=totals.total_state_withheld,
            federal_taxable_income=totals.federal_taxable_income,
            state_taxable_income=totals.state_taxable_income,
            federal_tax=federal_tax,
            state_surtax=state_surtax,
            state_tax=state_tax,
            total_tax=total_tax,
            federal_additional_needed=federal_add,
            state_additional_needed=state_add,
            total_additional_needed=federal_add + state_add,
            you=allocate(you, totals.total_gross, total_tax),
            spouse=allocate(spouse, totals.total_gross, total_tax),
            effective_tax_rate=effective_rate,
        )

    def calculate_state(self, state: "CalculatorState") -> TaxResults:
        """Compute results for a stored state, using the tables for its filing status."""
        status = state.settings.filing_status
        return self.calculate(
            settings=state.settings,
            you=state.you,
            spouse=state.spouse,
            federal_brackets=state.federal_brackets.get(status, []),
            state_brackets=state.state_brackets.get(status, []),
        )


def calculate(
    settings: Settings,
    you: Sequence[Job],
    spouse: Sequence[Job],
    federal_brackets: BracketTable,
    state_brackets: BracketTable,
) -> TaxResults:
    """Single entry point for one calculation."""
    return WithholdingCalculator().calculate(
        settings, you, spouse, federal_brackets, state_brackets
    )
