"""
Service layer helpers that orchestrate providers and domain logic.
"""

from .batch import BatchOrchestrator, FailurePolicy, RetryGate
from .credentials import CredentialAcquirer, TyperCredentialPrompter, resolve_environment_domain
from .protocols import CredentialPrompterProtocol, DriveProviderProtocol
from .reconciler import DriveReconciler

__all__ = [
    "BatchOrchestrator",
    "CredentialAcquirer",
    "CredentialPrompterProtocol",
    "DriveProviderProtocol",
    "DriveReconciler",
    "FailurePolicy",
    "RetryGate",
    "TyperCredentialPrompter",
    "resolve_environment_domain",
]
