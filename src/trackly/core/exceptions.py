from __future__ import annotations

from typing import Optional, Sequence


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    def __init__(self, message: str, errors: Optional[Sequence[dict]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


class NotFoundError(DomainError):
    """Raised when a requested resource does not exist for the user."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ScheduleParseError(DomainError):
    """Raised when a schedule PDF cannot be turned into schedule items."""


class PdfNotFoundError(ScheduleParseError):
    """The uploaded PDF is missing on disk."""


class NoExtractableTextError(ScheduleParseError):
    """The PDF has no text layer (scanned, image-only or protected)."""
