"""Withholding summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from withholding.engines.brackets import FILING_STATUS_LABELS, TAX_YEAR
from withholding.engines.tax import bracket_breakdown, marginal_rate
from withholding.formatting import format_currency, format_currency_compact, format_percent
from withholding.models.brackets import BracketTable
from withholding.models.results import TaxResults

TEMPLATE_DIR = Path(__file__).parent / "templates"


class WithholdingSummaryGenerator:
    """Generates a human-readable withholding summary report."""

    def __init__(self) -> None:
        self.env = Environment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["currency"] = format_currency
        self.env.filters["currency_compact"] = format_currency_compact
        self.env.filters["percent"] = format_percent

    def render(
        self,
        results: TaxResults,
        federal_brackets: BracketTable,
        state_brackets: BracketTable,
    ) -> str:
        """Render the summary, including the per-bracket breakdown in progressive mode."""
        template = self.env.get_template("withholding_summary.txt")
        return template.render(
            res=results,
            filing_status_label=FILING_STATUS_LABELS[results.filing_status],
            tax_year=TAX_YEAR,
            federal_segments=bracket_breakdown(results.federal_taxable_income, federal_brackets),
            state_segments=bracket_breakdown(results.state_taxable_income, state_brackets),
            federal_marginal=marginal_rate(results.federal_taxable_income, federal_brackets),
            state_marginal=marginal_rate(results.state_taxable_income, state_brackets),
        )
