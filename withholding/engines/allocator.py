"""Fair-share allocation of household tax to each partner.

Total liability is pooled (the household files jointly) and split in
proportion to each partner's gross income. The shortfall compares that share
with what the partner's own jobs withheld; it is not the tax the partner
individually owes.
"""

from collections.abc import Iterable
from decimal import Decimal

from withholding.engines.aggregator import sum_jobs
from withholding.models.inputs import Job
from withholding.models.results import PartnerBreakdown

ZERO = Decimal("0")


def allocate(jobs: Iterable[Job], total_gross: Decimal, total_tax: Decimal) -> PartnerBreakdown:
    """Compute one partner's breakdown against the household totals."""
    totals = sum_jobs(jobs)
    total_withheld = totals.total_withheld

    income_share = totals.gross / total_gross if total_gross > ZERO else ZERO
    effective_rate = total_withheld / totals.gross if totals.gross > ZERO else ZERO
    fair_share = total_tax * income_share

    return PartnerBreakdown(
        gross=totals.gross,
        fed_withheld=totals.fed_withheld,
        state_withheld=totals.state_withheld,
        total_withheld=total_withheld,
        effective_withholding_rate=effective_rate,
        income_share=income_share,
        fair_share_of_tax=fair_share,
        shortfall=fair_share - total_withheld,
    )
