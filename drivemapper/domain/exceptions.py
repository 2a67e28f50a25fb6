"""
Domain-specific exception hierarchy for the drive mapper application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import BatchReport


class DriveMapperError(Exception):
    """Base class for all application-level errors."""


class ValidationError(DriveMapperError):
    """Raised when a drive letter, share path or principal is malformed."""


class EmptyUsernameError(DriveMapperError):
    """Raised when the user enters a blank username at the credential prompt."""


class ProviderError(DriveMapperError):
    """Raised by a drive provider when querying, binding or unbinding fails."""

    def __init__(self, message: str, letter: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.letter = letter


class AggregateBatchFailure(DriveMapperError):
    """
    Raised when a batch still has failed mappings after the retry pass.

    The full report is attached so callers can inspect every mapping's
    final outcome, not only the failures.
    """

    def __init__(self, report: "BatchReport"):
        self.report = report
        letters = ", ".join(f"{letter}:" for letter in report.failed_letters)
        super().__init__(f"Failed to map drive(s): {letters}")


class UnsupportedPlatformError(DriveMapperError):
    """Raised when no drive provider exists for the current platform."""
