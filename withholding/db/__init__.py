"""Database layer for the withholding planner."""

from withholding.db.repository import StateRepository
from withholding.db.schema import create_schema

__all__ = ["StateRepository", "create_schema"]
