from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for everything shown to the teacher as a notification."""


class ValidationError(DomainError):
    """Raised when form or CSV input is invalid."""


class AuthenticationError(DomainError):
    """Raised when login credentials are rejected."""


class AuthError(DomainError):
    """Raised when the stored token is missing or no longer accepted."""


class NetworkError(DomainError):
    """Raised when the backend cannot be reached (connection, DNS, timeout)."""


class ApiError(DomainError):
    """Raised for non-2xx responses and for payloads with ``success: false``."""

    def __init__(self, message: str, *, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AttendanceStateError(DomainError):
    """Raised when a transition is not allowed from the current state."""


class AttendanceLockedError(AttendanceStateError):
    """Raised when presence is toggled on a submitted sheet outside edit mode."""


class StaleStateError(DomainError):
    """Raised when a response or form belongs to an older load of the sheet."""


class NoReportDataError(DomainError):
    """Raised when a report is requested for an empty roster."""
