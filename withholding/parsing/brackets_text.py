"""Text format for bracket tables.

A table is written as a JSON array of ``{"upTo": <number|null>, "rate":
<number>}`` objects in ascending order, with a trailing ``"upTo": null`` entry
for the top bracket::

    [{"upTo": 11925, "rate": 0.10}, {"upTo": 48475, "rate": 0.12},
     {"upTo": null, "rate": 0.37}]

Parsing is all-or-nothing on structure (valid JSON with an array at the top)
but permissive on values: numbers are coerced without range checks. A value,
or a whole entry, that is not a number becomes NaN and the engine skips that
bracket. Numbers are read and written as exact Decimal literals, so a table
survives a dump and re-parse unchanged.
"""

from decimal import Decimal, InvalidOperation
from typing import Any

import simplejson as json

from withholding.exceptions import BracketFormatError
from withholding.models.brackets import (
    BoundedBracket,
    BracketTable,
    TaxBracket,
    UnboundedBracket,
    bracket_ceiling,
)

NAN = Decimal("NaN")


def _coerce_number(value: Any) -> Decimal:
    """Loose numeric coercion: null is 0, blanks are 0, garbage is NaN."""
    if value is None:
        return Decimal("0")
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return Decimal("0")
        try:
            return Decimal(text)
        except InvalidOperation:
            return NAN
    return NAN


def entry_to_bracket(entry: Any) -> TaxBracket:
    """Convert one ``{"upTo", "rate"}`` object to a bracket.

    A ``null`` entry is rejected. Any other non-object entry becomes a bracket
    with a NaN ceiling and rate.
    """
    if entry is None:
        raise BracketFormatError()
    if not isinstance(entry, dict):
        return BoundedBracket(ceiling=NAN, rate=NAN)
    rate = _coerce_number(entry["rate"]) if "rate" in entry else NAN
    if "upTo" in entry and entry["upTo"] is None:
        return UnboundedBracket(rate=rate)
    ceiling = _coerce_number(entry["upTo"]) if "upTo" in entry else NAN
    return BoundedBracket(ceiling=ceiling, rate=rate)


def bracket_to_entry(bracket: TaxBracket) -> dict[str, Decimal | None]:
    return {"upTo": bracket_ceiling(bracket), "rate": bracket.rate}


def entries_to_table(entries: Any) -> BracketTable:
    if not isinstance(entries, list):
        raise BracketFormatError()
    return [entry_to_bracket(entry) for entry in entries]


def table_to_entries(table: BracketTable) -> list[dict[str, Decimal | None]]:
    return [bracket_to_entry(bracket) for bracket in table]


def parse_brackets(text: str) -> BracketTable:
    """Parse bracket text into a table.

    Raises:
        BracketFormatError: text is not JSON, not an array, or holds a
            ``null`` entry.
    """
    try:
        raw = json.loads(text, use_decimal=True, parse_int=Decimal, allow_nan=True)
    except (json.JSONDecodeError, TypeError) as exc:
        raise BracketFormatError() from exc
    return entries_to_table(raw)


def try_parse_brackets(text: str) -> BracketTable | None:
    """Parse bracket text, returning None instead of raising on bad input."""
    try:
        return parse_brackets(text)
    except BracketFormatError:
        return None


def dump_brackets(table: BracketTable) -> str:
    """Render a table in the bracket text format."""
    return json.dumps(table_to_entries(table), use_decimal=True, indent=2)


def check_bracket_table(table: BracketTable) -> list[str]:
    """Report structural problems in a table. Advisory only, never raises."""
    problems: list[str] = []
    if not table:
        return ["Table has no brackets"]

    prev: Decimal | None = None
    for index, bracket in enumerate(table, 1):
        rate = bracket.rate
        if not isinstance(rate, Decimal) or not rate.is_finite():
            problems.append(f"Bracket {index}: rate is not a number")
        elif rate < 0:
            problems.append(f"Bracket {index}: rate is negative")

        if isinstance(bracket, UnboundedBracket):
            if index != len(table):
                problems.append(f"Bracket {index}: unbounded bracket must be last")
            continue

        ceiling = bracket.ceiling
        if not isinstance(ceiling, Decimal) or not ceiling.is_finite():
            problems.append(f"Bracket {index}: ceiling is not a number")
            continue
        if ceiling <= 0:
            problems.append(f"Bracket {index}: ceiling must be positive")
        if prev is not None and ceiling <= prev:
            problems.append(f"Bracket {index}: ceiling {ceiling} does not exceed {prev}")
        prev = ceiling

    if not isinstance(table[-1], UnboundedBracket):
        problems.append("Last bracket should be unbounded (upTo: null)")
    return problems
