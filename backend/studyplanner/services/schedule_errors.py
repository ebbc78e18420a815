"""Error taxonomy for schedule generation."""
from __future__ import annotations

from typing import Optional

from fastapi import status

GENERIC_SCHEDULE_ERROR = "Failed to generate schedule"


class ScheduleError(Exception):
    """Base class for failures surfaced to API callers as {error, details}."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = GENERIC_SCHEDULE_ERROR, details: Optional[str] = None) -> None:
        super().__init__(details or message)
        self.message = message
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidInput(ScheduleError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "No tasks or events provided.", details: Optional[str] = None) -> None:
        super().__init__(message, details)


class ExtractionFailure(ScheduleError):
    """No structured literal could be located in the model output."""


class ParseFailure(ScheduleError):
    """A literal was located but is not valid data of the expected shape."""


class UpstreamError(ScheduleError):
    """The generative model call failed."""


class TipParseFailure(Exception):
    """Tip response could not be used; callers degrade to an empty tip list."""
