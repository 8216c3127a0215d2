"""Household withholding planner: federal + California shortfall estimates."""

__version__ = "0.1.0"
