"""Default tax bracket configuration.

Federal and California brackets, standard deductions, top marginal rates and
the California Mental Health Services surtax, keyed by filing status. These
are the defaults a fresh calculator state starts from; every table can be
replaced through the bracket editor.

Sources:
  - Federal 2025: IRS Rev. Proc. 2024-40
  - California 2025: FTB 540 tax rate schedules (2025)
"""

from decimal import Decimal

from withholding.models.brackets import BracketTable, make_table
from withholding.models.enums import FilingStatus

TAX_YEAR = 2025

# ---------------------------------------------------------------------------
# Federal ordinary income brackets: {filing_status: [(upper_bound, rate), ...]}
# Upper bound None marks the top bracket.
# ---------------------------------------------------------------------------
_FEDERAL_ROWS: dict[FilingStatus, list[tuple[str | None, str]]] = {
    FilingStatus.SINGLE: [
        ("11925", "0.10"),
        ("48475", "0.12"),
        ("103350", "0.22"),
        ("197300", "0.24"),
        ("250525", "0.32"),
        ("626350", "0.35"),
        (None, "0.37"),
    ],
    FilingStatus.MFJ: [
        ("23850", "0.10"),
        ("96950", "0.12"),
        ("206700", "0.22"),
        ("394600", "0.24"),
        ("501050", "0.32"),
        ("751600", "0.35"),
        (None, "0.37"),
    ],
    FilingStatus.MFS: [
        ("11925", "0.10"),
        ("48475", "0.12"),
        ("103350", "0.22"),
        ("197300", "0.24"),
        ("250525", "0.32"),
        ("375800", "0.35"),
        (None, "0.37"),
    ],
    FilingStatus.HOH: [
        ("17000", "0.10"),
        ("64850", "0.12"),
        ("103350", "0.22"),
        ("197300", "0.24"),
        ("250500", "0.32"),
        ("626350", "0.35"),
        (None, "0.37"),
    ],
}

# ---------------------------------------------------------------------------
# California brackets: CA Revenue and Taxation Code Section 17041
# ---------------------------------------------------------------------------
_CALIFORNIA_SINGLE_ROWS: list[tuple[str | None, str]] = [
    ("11079", "0.01"),
    ("26264", "0.02"),
    ("41452", "0.04"),
    ("57542", "0.06"),
    ("72724", "0.08"),
    ("371479", "0.093"),
    ("445771", "0.103"),
    ("742953", "0.113"),
    (None, "0.123"),
]

_CALIFORNIA_ROWS: dict[FilingStatus, list[tuple[str | None, str]]] = {
    FilingStatus.SINGLE: _CALIFORNIA_SINGLE_ROWS,
    FilingStatus.MFJ: [
        ("22158", "0.01"),
        ("52528", "0.02"),
        ("82904", "0.04"),
        ("115084", "0.06"),
        ("145448", "0.08"),
        ("742958", "0.093"),
        ("891542", "0.103"),
        ("1485906", "0.113"),
        (None, "0.123"),
    ],
    FilingStatus.MFS: _CALIFORNIA_SINGLE_ROWS,
    FilingStatus.HOH: [
        ("22173", "0.01"),
        ("52530", "0.02"),
        ("67716", "0.04"),
        ("83805", "0.06"),
        ("98990", "0.08"),
        ("505208", "0.093"),
        ("606251", "0.103"),
        ("1010417", "0.113"),
        (None, "0.123"),
    ],
}

# ---------------------------------------------------------------------------
# Standard deductions
# ---------------------------------------------------------------------------
FEDERAL_STANDARD_DEDUCTION: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("15000"),
    FilingStatus.MFJ: Decimal("30000"),
    FilingStatus.MFS: Decimal("15000"),
    FilingStatus.HOH: Decimal("22500"),
}

CALIFORNIA_STANDARD_DEDUCTION: dict[FilingStatus, Decimal] = {
    FilingStatus.SINGLE: Decimal("5540"),
    FilingStatus.MFJ: Decimal("11080"),
    FilingStatus.MFS: Decimal("5540"),
    FilingStatus.HOH: Decimal("11080"),
}

# ---------------------------------------------------------------------------
# Top marginal rates used by the flat top-rate (worst case) mode
# ---------------------------------------------------------------------------
FEDERAL_TOP_RATE = Decimal("0.37")
CALIFORNIA_TOP_RATE = Decimal("0.123")

# ---------------------------------------------------------------------------
# California Mental Health Services Tax: 1% on income above $1M
# CA Revenue and Taxation Code Section 17043(a)
# ---------------------------------------------------------------------------
CA_MENTAL_HEALTH_THRESHOLD = Decimal("1000000")
CA_MENTAL_HEALTH_RATE = Decimal("0.01")

# Key under which the whole calculator state is persisted.
STORAGE_KEY = "tax-calculator-state"

FILING_STATUS_LABELS: dict[FilingStatus, str] = {
    FilingStatus.SINGLE: "Single",
    FilingStatus.MFJ: "Married Filing Jointly",
    FilingStatus.HOH: "Head of Household",
    FilingStatus.MFS: "Married Filing Separately",
}


def default_federal_brackets() -> dict[FilingStatus, BracketTable]:
    """Fresh copy of the default federal tables for every filing status."""
    return {status: make_table(rows) for status, rows in _FEDERAL_ROWS.items()}


def default_california_brackets() -> dict[FilingStatus, BracketTable]:
    """Fresh copy of the default California tables for every filing status."""
    return {status: make_table(rows) for status, rows in _CALIFORNIA_ROWS.items()}
