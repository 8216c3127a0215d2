"""Custom exceptions for the withholding planner."""


class WithholdingError(Exception):
    """Base exception for withholding planner errors."""


class BracketFormatError(WithholdingError):
    """Raised when bracket text cannot be parsed into a bracket table."""

    def __init__(self, message: str = "Invalid JSON format"):
        super().__init__(message)


class StateNotFoundError(WithholdingError):
    """Raised when no calculator state has been stored yet."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No calculator state found in {location}")


class UnknownJobError(WithholdingError):
    """Raised when a job id does not exist in a partner's job list."""

    def __init__(self, partner: str, job_id: str):
        self.partner = partner
        self.job_id = job_id
        super().__init__(f"No job {job_id} for {partner}")
