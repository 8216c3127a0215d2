"""Enumerations for the withholding planner."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "SINGLE"
    MFJ = "MARRIED_FILING_JOINTLY"
    MFS = "MARRIED_FILING_SEPARATELY"
    HOH = "HEAD_OF_HOUSEHOLD"


class CalculationMode(StrEnum):
    FLAT_TOP = "top"
    PROGRESSIVE = "progressive"


class Jurisdiction(StrEnum):
    FEDERAL = "FEDERAL"
    CALIFORNIA = "CALIFORNIA"


class Partner(StrEnum):
    YOU = "you"
    SPOUSE = "spouse"
