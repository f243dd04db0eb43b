"""Exception classes for the process engine."""


class ProcessError(Exception):
    """Base process engine exception."""

    def __init__(self, message: str, process_id: str | None = None):
        self.message = message
        self.process_id = process_id
        super().__init__(message)


class NotFoundError(ProcessError):
    """A referenced entity does not exist."""

    pass


class ProcessNotFoundError(NotFoundError):
    """No process is registered under the requested identifier."""

    pass


class ValidationError(ProcessError):
    """Caller-supplied input is missing or unusable."""

    pass


class JourneyNotFoundError(ValidationError):
    """The journey a run was requested for does not exist."""

    def __init__(self, journey_id: str, process_id: str | None = None):
        self.journey_id = journey_id
        super().__init__(f"Journey {journey_id} not found", process_id=process_id)


class InputValidationError(ValidationError):
    """A process parameter is absent, empty after parsing, or malformed.

    Reported as a failed result, never logged as an unexpected error.
    """

    def __init__(
        self,
        message: str,
        missing: list[str] | None = None,
        process_id: str | None = None,
    ):
        self.missing = missing or []
        super().__init__(message, process_id=process_id)
