"""
Domain layer - Mapping types and validation without external side effects.
"""

from .exceptions import (
    AggregateBatchFailure,
    DriveMapperError,
    EmptyUsernameError,
    ProviderError,
    UnsupportedPlatformError,
    ValidationError,
)
from .models import (
    BatchReport,
    BindingState,
    Credential,
    DriveMapping,
    MappingOutcome,
    MappingResult,
)

__all__ = [
    "AggregateBatchFailure",
    "BatchReport",
    "BindingState",
    "Credential",
    "DriveMapperError",
    "DriveMapping",
    "EmptyUsernameError",
    "MappingOutcome",
    "MappingResult",
    "ProviderError",
    "UnsupportedPlatformError",
    "ValidationError",
]
