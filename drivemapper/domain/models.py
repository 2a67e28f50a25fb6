"""
Domain models for drive mappings, credentials and reconciliation results.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional

from pydantic import SecretStr

from .exceptions import ProviderError, ValidationError

UNC_PREFIX = "\\\\"
DOMAIN_SEPARATOR = "\\"


def normalize_target(path: str) -> str:
    """
    Normalize a share path for comparison.

    Windows treats share paths case-insensitively and ignores a trailing
    backslash, so ``\\\\SRV\\Share\\`` and ``\\\\srv\\share`` are the same target.
    """
    return path.rstrip(DOMAIN_SEPARATOR).casefold()


def targets_match(current: Optional[str], desired: str) -> bool:
    """Check whether an existing binding target equals the desired one."""
    if current is None:
        return False
    return normalize_target(current) == normalize_target(desired)


@dataclass(frozen=True)
class DriveMapping:
    """
    A desired binding of a drive letter to a UNC share.

    Invariants (enforced by ``validated``):
    - letter is a single ASCII letter, normalized to uppercase
    - target_path starts with ``\\\\`` and has more than 2 characters after it
    """
    letter: str
    target_path: str

    def validated(self) -> "DriveMapping":
        """
        Return a normalized copy of this mapping.

        Raises:
            ValidationError: If the letter or the path is malformed
        """
        letter = self.letter if isinstance(self.letter, str) else ""
        if len(letter) != 1 or not (letter.isascii() and letter.isalpha()):
            raise ValidationError(
                f"Invalid drive letter {self.letter!r}: expected a single letter A-Z"
            )

        path = self.target_path if isinstance(self.target_path, str) else ""
        if not path.startswith(UNC_PREFIX) or len(path) - len(UNC_PREFIX) <= 2:
            raise ValidationError(
                f"Invalid share path {self.target_path!r} for drive {letter.upper()}: "
                f"expected a UNC path like \\\\server\\share"
            )

        return replace(self, letter=letter.upper())

    def __str__(self) -> str:
        return f"{self.letter}: -> {self.target_path}"


@dataclass(frozen=True)
class Credential:
    """
    A principal in ``DOMAIN\\username`` form and its secret.

    The secret is a ``SecretStr`` so it is masked in repr() and log output.
    """
    principal: str
    secret: SecretStr = field(repr=False)

    def __post_init__(self):
        parts = self.principal.split(DOMAIN_SEPARATOR)
        if len(parts) != 2 or not all(part.strip() for part in parts):
            raise ValidationError(
                f"Invalid principal {self.principal!r}: expected DOMAIN\\username"
            )

    @property
    def domain(self) -> str:
        return self.principal.split(DOMAIN_SEPARATOR)[0]

    @property
    def username(self) -> str:
        return self.principal.split(DOMAIN_SEPARATOR)[1]


@dataclass(frozen=True)
class BindingState:
    """Current OS-level binding of a drive letter, as reported by a provider."""
    exists: bool
    target: Optional[str] = None


class MappingOutcome(str, Enum):
    """Result of reconciling a single mapping."""
    ALREADY_MAPPED = "already_mapped"
    CREATED = "created"
    REMAPPED = "remapped"
    SKIPPED = "skipped"
    FAILED = "failed"

    @property
    def is_success(self) -> bool:
        return self is not MappingOutcome.FAILED


@dataclass
class MappingResult:
    """Outcome of reconciling one drive letter."""
    letter: str
    outcome: MappingOutcome
    detail: Optional[str] = None
    error: Optional[ProviderError] = None

    @property
    def succeeded(self) -> bool:
        return self.outcome.is_success


@dataclass
class BatchReport:
    """Ordered results of a batch run."""
    results: List[MappingResult] = field(default_factory=list)
    succeeded: bool = False

    @property
    def failed(self) -> List[MappingResult]:
        """Results that ended in FAILED, in batch order."""
        return [result for result in self.results if not result.succeeded]

    @property
    def failed_letters(self) -> List[str]:
        return [result.letter for result in self.failed]

    def result_for(self, letter: str) -> Optional[MappingResult]:
        """Find the result for a drive letter (case-insensitive)."""
        for result in self.results:
            if result.letter == letter.upper():
                return result
        return None
