"""Bracket table editing.

Holds the federal and state tables for every filing status. An edit replaces
exactly one table; text that does not parse leaves every table untouched and
records an error for that jurisdiction.
"""

import logging

from withholding.engines.brackets import default_california_brackets, default_federal_brackets
from withholding.exceptions import BracketFormatError
from withholding.models.brackets import BracketTable
from withholding.models.enums import FilingStatus, Jurisdiction
from withholding.parsing.brackets_text import dump_brackets, parse_brackets

logger = logging.getLogger(__name__)


class BracketEditor:
    """Applies text edits to per-filing-status bracket tables."""

    def __init__(
        self,
        federal_brackets: dict[FilingStatus, BracketTable] | None = None,
        state_brackets: dict[FilingStatus, BracketTable] | None = None,
    ) -> None:
        self.tables: dict[Jurisdiction, dict[FilingStatus, BracketTable]] = {
            Jurisdiction.FEDERAL: dict(
                federal_brackets if federal_brackets is not None else default_federal_brackets()
            ),
            Jurisdiction.CALIFORNIA: dict(
                state_brackets if state_brackets is not None else default_california_brackets()
            ),
        }
        self.errors: dict[Jurisdiction, str] = {}

    @property
    def federal_brackets(self) -> dict[FilingStatus, BracketTable]:
        return self.tables[Jurisdiction.FEDERAL]

    @property
    def state_brackets(self) -> dict[FilingStatus, BracketTable]:
        return self.tables[Jurisdiction.CALIFORNIA]

    def text(self, jurisdiction: Jurisdiction, filing_status: FilingStatus) -> str:
        """Current table for one jurisdiction and status, in bracket text format."""
        return dump_brackets(self.tables[jurisdiction].get(filing_status, []))

    def edit(self, jurisdiction: Jurisdiction, filing_status: FilingStatus, text: str) -> bool:
        """Replace one table from text. Returns False, changing nothing, if the text is invalid."""
        try:
            table = parse_brackets(text)
        except BracketFormatError as exc:
            logger.info("Rejected %s bracket edit for %s: %s", jurisdiction, filing_status, exc)
            self.errors[jurisdiction] = str(exc)
            return False

        self.errors.pop(jurisdiction, None)
        # Earlier snapshots of the mapping stay unchanged.
        updated = dict(self.tables[jurisdiction])
        updated[filing_status] = table
        self.tables[jurisdiction] = updated
        return True

    def reset_to_defaults(self) -> None:
        self.tables[Jurisdiction.FEDERAL] = default_federal_brackets()
        self.tables[Jurisdiction.CALIFORNIA] = default_california_brackets()
        self.errors = {}
