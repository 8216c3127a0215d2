"""Tax computation engines."""

from withholding.engines.calculator import WithholdingCalculator, calculate
from withholding.engines.tax import (
    bracket_breakdown,
    compute_flat_top_tax,
    compute_progressive_tax,
    compute_surtax,
    marginal_rate,
)

__all__ = [
    "WithholdingCalculator",
    "bracket_breakdown",
    "calculate",
    "compute_flat_top_tax",
    "compute_progressive_tax",
    "compute_surtax",
    "marginal_rate",
]
