"""Tax bracket data models.

A bracket table is an ordered list of brackets. Every bracket but the last has
an explicit ceiling; the last one is unbounded and taxes everything above the
prior ceiling. Values are not range-checked here: a bracket edited by hand may
carry a NaN or negative rate, and the engine skips such brackets.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class BoundedBracket:
    """A bracket that stops at ``ceiling``."""

    ceiling: Decimal
    rate: Decimal


@dataclass(frozen=True)
class UnboundedBracket:
    """The top bracket: no ceiling."""

    rate: Decimal


TaxBracket = BoundedBracket | UnboundedBracket
BracketTable = list[TaxBracket]


def bracket_ceiling(bracket: TaxBracket) -> Decimal | None:
    """Return the ceiling of a bracket, or None for the unbounded top bracket."""
    if isinstance(bracket, BoundedBracket):
        return bracket.ceiling
    return None


def make_table(rows: list[tuple[str | None, str]]) -> BracketTable:
    """Build a bracket table from ``(ceiling, rate)`` string pairs.

    A ``None`` ceiling produces the unbounded top bracket.
    """
    table: BracketTable = []
    for ceiling, rate in rows:
        if ceiling is None:
            table.append(UnboundedBracket(rate=Decimal(rate)))
        else:
            table.append(BoundedBracket(ceiling=Decimal(ceiling), rate=Decimal(rate)))
    return table
