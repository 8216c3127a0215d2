"""Tax liability computation.

Implements:
  - Progressive bracket accumulation (federal + California)
  - Flat top-marginal-rate estimate (worst case planning)
  - California Mental Health Services surtax per CA R&TC Section 17043(a)
  - Per-bracket breakdown and marginal rate lookup for display

Brackets with a non-finite or negative rate, or a non-finite ceiling, are
skipped rather than rejected: hand-edited tables reach this module unvalidated.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from withholding.engines.brackets import CA_MENTAL_HEALTH_RATE, CA_MENTAL_HEALTH_THRESHOLD
from withholding.models.brackets import BoundedBracket, BracketTable, TaxBracket
from withholding.models.inputs import to_decimal
from withholding.models.results import BracketSegment

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
ONE = Decimal("1")
DEFAULT_TOP_DISPLAY_WIDTH = Decimal("100000")


def _as_decimal(value: Any) -> Decimal:
    """Convert without coercing NaN/infinity away, so callers can detect them."""
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("NaN")


def _usable_rate(bracket: TaxBracket) -> Decimal | None:
    rate = _as_decimal(bracket.rate)
    if not rate.is_finite() or rate < ZERO:
        return None
    return rate


def _usable_ceiling(bracket: BoundedBracket) -> Decimal | None:
    ceiling = _as_decimal(bracket.ceiling)
    return ceiling if ceiling.is_finite() else None


def compute_progressive_tax(taxable_income: Any, brackets: BracketTable) -> Decimal:
    """Apply progressive tax brackets to taxable income.

    Each bracket taxes the slice of income between the previous ceiling and
    its own. The unbounded bracket taxes everything above the previous
    ceiling and ends the scan.
    """
    income = max(to_decimal(taxable_income), ZERO)
    tax = ZERO
    prev_bound = ZERO

    for bracket in brackets:
        rate = _usable_rate(bracket)
        if rate is None:
            logger.debug("Skipping bracket with unusable rate: %r", bracket)
            continue

        if not isinstance(bracket, BoundedBracket):
            tax += max(income - prev_bound, ZERO) * rate
            break

        upper_bound = _usable_ceiling(bracket)
        if upper_bound is None:
            logger.debug("Skipping bracket with unusable ceiling: %r", bracket)
            continue

        tax += max(min(income, upper_bound) - prev_bound, ZERO) * rate
        prev_bound = upper_bound
        if income <= upper_bound:
            break

    return tax


def compute_flat_top_tax(taxable_income: Any, top_rate: Any) -> Decimal:
    """Worst case: every dollar of taxable income at the top marginal rate."""
    return max(to_decimal(taxable_income), ZERO) * to_decimal(top_rate)


def compute_surtax(
    state_taxable_income: Any,
    threshold: Decimal = CA_MENTAL_HEALTH_THRESHOLD,
    rate: Decimal = CA_MENTAL_HEALTH_RATE,
) -> Decimal:
    """California Mental Health Services Tax on income above the threshold."""
    return max(to_decimal(state_taxable_income) - threshold, ZERO) * rate


def marginal_rate(taxable_income: Any, brackets: BracketTable) -> Decimal:
    """Rate of the bracket the last dollar of taxable income falls in."""
    income = to_decimal(taxable_income)
    if income <= ZERO:
        return ZERO

    rate = ZERO
    for bracket in brackets:
        usable = _usable_rate(bracket)
        if usable is None:
            continue
        rate = usable
        if not isinstance(bracket, BoundedBracket):
            break
        ceiling = _usable_ceiling(bracket)
        if ceiling is not None and income <= ceiling:
            break
    return rate


def bracket_breakdown(taxable_income: Any, brackets: BracketTable) -> list[BracketSegment]:
    """Split taxable income across brackets, one segment per usable bracket.

    ``fill`` is the share of a bracket's width covered by the income. The
    unbounded bracket has no width, so its fill is measured against the
    widest finite bracket.
    """
    income = max(to_decimal(taxable_income), ZERO)

    usable: list[tuple[Decimal | None, Decimal]] = []
    for bracket in brackets:
        rate = _usable_rate(bracket)
        if rate is None:
            continue
        if isinstance(bracket, BoundedBracket):
            ceiling = _usable_ceiling(bracket)
            if ceiling is None:
                continue
            usable.append((ceiling, rate))
        else:
            usable.append((None, rate))

    widths = []
    floor = ZERO
    for ceiling, _ in usable:
        if ceiling is not None:
            widths.append(ceiling - floor)
            floor = ceiling
    top_width = max(widths) if widths else DEFAULT_TOP_DISPLAY_WIDTH
    if top_width <= ZERO:
        top_width = DEFAULT_TOP_DISPLAY_WIDTH

    segments: list[BracketSegment] = []
    floor = ZERO
    for ceiling, rate in usable:
        if ceiling is None:
            in_bracket = max(income - floor, ZERO)
            fill = min(ONE, in_bracket / top_width)
        else:
            in_bracket = max(min(income, ceiling) - floor, ZERO)
            width = ceiling - floor
            if income >= ceiling:
                fill = ONE
            elif width > ZERO:
                fill = in_bracket / width
            else:
                fill = ZERO
        segments.append(
            BracketSegment(
                floor=floor,
                ceiling=ceiling,
                rate=rate,
                income_in_bracket=in_bracket,
                tax_in_bracket=in_bracket * rate,
                fill=fill,
            )
        )
        if ceiling is None:
            break
        floor = ceiling

    return segments
