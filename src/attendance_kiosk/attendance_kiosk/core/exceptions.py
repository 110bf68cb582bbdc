from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class RfidNotFound(DomainError):
    """Raised when no student carries the presented RFID tag."""


class NoActiveSession(DomainError):
    """Raised when none of the student's sessions is open right now."""


class FaceMismatch(DomainError):
    """Raised when the live face does not match the stored embedding."""

    def __init__(self, message: str, *, distance: float | None = None):
        super().__init__(message)
        self.distance = distance


class SessionNotFound(DomainError):
    """Raised when a report is requested for an unknown session."""


class DataUnavailable(DomainError):
    """Raised when roster or attendance data cannot be read for a report."""


class RecordingFailed(DomainError):
    """Raised when an attendance event cannot be written."""
