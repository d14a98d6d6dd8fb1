"""
Error taxonomy for Task Tracker Service.

Services raise these; the handlers registered in ``main.py`` map each kind
to a single HTTP status code.
"""
from typing import Optional


class TrackerError(Exception):
    """Base class for every error the service surfaces to callers."""

    status_code: int = 500

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.field:
            payload["field"] = self.field
        return payload


class ValidationError(TrackerError):
    """Malformed or missing input, bad enum value, bad grouping dimension."""

    status_code = 400


class NotFoundError(TrackerError):
    """A reference or identifier that does not exist."""

    status_code = 404

    def __init__(self, kind: str, value: str):
        super().__init__(f"{kind} not found: {value}")
        self.kind = kind
        self.value = value


class StoreError(TrackerError):
    """The database is unreachable or rejected the operation."""

    status_code = 500
