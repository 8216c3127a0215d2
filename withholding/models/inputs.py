"""Calculator input models: jobs and settings.

Numeric fields never fail validation. Anything that is not a finite number
(blank strings, ``None``, ``"abc"``, NaN, infinity) becomes zero, so a
half-filled form still yields an estimate.
"""

from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from withholding.models.enums import CalculationMode, FilingStatus

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce ``value`` to a finite Decimal, returning 0 when that is impossible."""
    if value is None:
        return ZERO
    if isinstance(value, bool):
        return Decimal(int(value))
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return ZERO
    try:
        number = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return ZERO
    if not number.is_finite():
        return ZERO
    return number


class Job(BaseModel):
    """One job held by one partner."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str = ""
    gross: Decimal = ZERO
    fed_withheld: Decimal = ZERO
    state_withheld: Decimal = ZERO

    @field_validator("gross", "fed_withheld", "state_withheld", mode="before")
    @classmethod
    def _coerce_money(cls, value: Any) -> Decimal:
        return to_decimal(value)

    @field_validator("name", mode="before")
    @classmethod
    def _coerce_name(cls, value: Any) -> str:
        return "" if value is None else str(value)


class Settings(BaseModel):
    """Immutable snapshot of the calculator settings."""

    model_config = ConfigDict(frozen=True)

    mode: CalculationMode = CalculationMode.PROGRESSIVE
    filing_status: FilingStatus = FilingStatus.MFJ
    federal_top_rate: Decimal = Decimal("0.37")
    state_top_rate: Decimal = Decimal("0.123")
    federal_standard_deduction: Decimal = Decimal("30000")
    state_standard_deduction: Decimal = Decimal("11080")
    other_adjustments: Decimal = ZERO
    california_surtax_enabled: bool = False

    @field_validator(
        "federal_top_rate",
        "state_top_rate",
        "federal_standard_deduction",
        "state_standard_deduction",
        "other_adjustments",
        mode="before",
    )
    @classmethod
    def _coerce_number(cls, value: Any) -> Decimal:
        return to_decimal(value)

    @classmethod
    def for_filing_status(cls, filing_status: FilingStatus) -> "Settings":
        """Default settings with the standard deductions for ``filing_status``."""
        from withholding.engines.brackets import (
            CALIFORNIA_STANDARD_DEDUCTION,
            FEDERAL_STANDARD_DEDUCTION,
        )

        return cls(
            filing_status=filing_status,
            federal_standard_deduction=FEDERAL_STANDARD_DEDUCTION[filing_status],
            state_standard_deduction=CALIFORNIA_STANDARD_DEDUCTION[filing_status],
        )

    def with_filing_status(self, filing_status: FilingStatus) -> "Settings":
        """Switch filing status and reset both standard deductions to its defaults."""
        from withholding.engines.brackets import (
            CALIFORNIA_STANDARD_DEDUCTION,
            FEDERAL_STANDARD_DEDUCTION,
        )

        return self.model_copy(
            update={
                "filing_status": filing_status,
                "federal_standard_deduction": FEDERAL_STANDARD_DEDUCTION[filing_status],
                "state_standard_deduction": CALIFORNIA_STANDARD_DEDUCTION[filing_status],
            }
        )
