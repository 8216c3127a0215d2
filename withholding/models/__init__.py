"""Data models for the withholding planner."""

from withholding.models.brackets import (
    BoundedBracket,
    BracketTable,
    TaxBracket,
    UnboundedBracket,
)
from withholding.models.enums import CalculationMode, FilingStatus, Jurisdiction, Partner
from withholding.models.inputs import Job, Settings
from withholding.models.results import BracketSegment, PartnerBreakdown, TaxResults

__all__ = [
    "BoundedBracket",
    "BracketSegment",
    "BracketTable",
    "CalculationMode",
    "FilingStatus",
    "Job",
    "Jurisdiction",
    "Partner",
    "PartnerBreakdown",
    "Settings",
    "TaxBracket",
    "TaxResults",
    "UnboundedBracket",
]
