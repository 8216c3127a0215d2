"""Complete calculator state: the single blob that gets persisted."""

from dataclasses import dataclass, field
from typing import Any

from withholding.exceptions import UnknownJobError
from withholding.models.brackets import BracketTable
from withholding.models.enums import FilingStatus, Partner
from withholding.models.inputs import Job, Settings
from withholding.parsing.brackets_text import entries_to_table, table_to_entries


@dataclass
class CalculatorState:
    settings: Settings = field(default_factory=Settings)
    you: list[Job] = field(default_factory=list)
    spouse: list[Job] = field(default_factory=list)
    federal_brackets: dict[FilingStatus, BracketTable] = field(default_factory=dict)
    state_brackets: dict[FilingStatus, BracketTable] = field(default_factory=dict)

    @classmethod
    def initial(cls) -> "CalculatorState":
        """Default settings, one blank job per partner, default bracket tables."""
        from withholding.engines.brackets import (
            default_california_brackets,
            default_federal_brackets,
        )

        return cls(
            settings=Settings.for_filing_status(FilingStatus.MFJ),
            you=[Job()],
            spouse=[Job()],
            federal_brackets=default_federal_brackets(),
            state_brackets=default_california_brackets(),
        )

    def jobs(self, partner: Partner) -> list[Job]:
        return self.you if partner == Partner.YOU else self.spouse

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation. Bracket tables use the bracket text entries."""
        return {
            "settings": self.settings.model_dump(mode="json"),
            "you": [job.model_dump(mode="json") for job in self.you],
            "spouse": [job.model_dump(mode="json") for job in self.spouse],
            "federal_brackets": {
                status.value: table_to_entries(table)
                for status, table in self.federal_brackets.items()
            },
            "state_brackets": {
                status.value: table_to_entries(table)
                for status, table in self.state_brackets.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CalculatorState":
        """Rebuild state from :meth:`to_dict` output.

        Raises pydantic ``ValidationError`` or ``BracketFormatError`` when the
        data does not have the expected shape.
        """
        return cls(
            settings=Settings.model_validate(data.get("settings") or {}),
            you=[Job.model_validate(job) for job in data.get("you") or []],
            spouse=[Job.model_validate(job) for job in data.get("spouse") or []],
            federal_brackets={
                FilingStatus(status): entries_to_table(entries)
                for status, entries in (data.get("federal_brackets") or {}).items()
            },
            state_brackets={
                FilingStatus(status): entries_to_table(entries)
                for status, entries in (data.get("state_brackets") or {}).items()
            },
        )

    def find_job(self, partner: Partner, job_id: str) -> Job:
        for job in self.jobs(partner):
            if job.id == job_id:
                return job
        raise UnknownJobError(partner.value, job_id)

    def remove_job(self, partner: Partner, job_id: str) -> Job:
        """Drop a job by id.

        Raises:
            UnknownJobError: the partner has no job with that id.
        """
        job = self.find_job(partner, job_id)
        self.jobs(partner).remove(job)
        return job

    def update_job(self, partner: Partner, job_id: str, **changes: Any) -> Job:
        """Replace a job's fields in place, keeping its id and position.

        Changed amounts go through the same coercion as new jobs.

        Raises:
            UnknownJobError: the partner has no job with that id.
        """
        current = self.find_job(partner, job_id)
        updated = Job.model_validate({**current.model_dump(), **changes, "id": job_id})
        jobs = self.jobs(partner)
        jobs[jobs.index(current)] = updated
        return updated
