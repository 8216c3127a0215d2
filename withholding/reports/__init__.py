"""Report generation for the withholding planner."""

from withholding.reports.summary import WithholdingSummaryGenerator

__all__ = ["WithholdingSummaryGenerator"]
