"""
Batch orchestration of drive mappings.

A batch runs in two passes. The first pass maps everything with the
current security context. Letters that fail are retried once with a
single shared credential, so the user is asked for a password at most
once per batch no matter how many shares reject the logon account.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, List, Optional, Sequence

import typer

from ..domain.exceptions import AggregateBatchFailure, EmptyUsernameError, ValidationError
from ..domain.models import BatchReport, Credential, DriveMapping
from .credentials import CredentialAcquirer
from .reconciler import DriveReconciler

logger = logging.getLogger(__name__)

# Receives the letters that failed in pass 1, returns whether to retry them.
RetryGate = Callable[[List[str]], bool]


class FailurePolicy(str, Enum):
    """What to do when the first pass leaves failed mappings."""
    PROMPT = "prompt"
    CONFIRM = "confirm"
    ABORT = "abort"


def confirm_retry_with_typer(letters: List[str]) -> bool:
    """Ask the user whether failed letters should be retried with other credentials."""
    drives = ", ".join(f"{letter}:" for letter in letters)
    return typer.confirm(f"Could not map {drives}. Retry with different credentials?", default=True)


def build_retry_gate(
    policy: FailurePolicy,
    confirm: Optional[RetryGate] = None,
) -> Optional[RetryGate]:
    """
    Translate a failure policy into a retry gate.

    Returns None for PROMPT, which means credentials are requested
    unconditionally.
    """
    if policy is FailurePolicy.PROMPT:
        return None
    if policy is FailurePolicy.ABORT:
        return lambda letters: False
    return confirm or confirm_retry_with_typer


class BatchOrchestrator:
    """
    Runs the reconciler over an ordered list of mappings with one retry pass.
    """

    def __init__(
        self,
        reconciler: DriveReconciler,
        credential_acquirer: CredentialAcquirer,
        domain_hint: Optional[str] = None,
        on_failure: Optional[RetryGate] = None,
    ) -> None:
        """
        Args:
            reconciler: Per-letter reconciler
            credential_acquirer: Used at most once per batch
            domain_hint: Domain forced onto the shared credential
            on_failure: Gate consulted before asking for credentials;
                None asks unconditionally
        """
        self._reconciler = reconciler
        self._credential_acquirer = credential_acquirer
        self._domain_hint = domain_hint
        self._on_failure = on_failure

    def map_all(self, desired: Sequence[DriveMapping], dry_run: bool = False) -> BatchReport:
        """
        Map every drive in ``desired``.

        Args:
            desired: Mappings in the order they should be applied
            dry_run: Inspect only, never bind or unbind

        Returns:
            BatchReport with ``succeeded=True``

        Raises:
            ValidationError: If any entry is malformed (before any provider call)
            AggregateBatchFailure: If mappings still fail after the retry pass
        """
        mappings = [mapping.validated() for mapping in desired]

        logger.info(
            "Mapping %d drive(s)%s", len(mappings), " (dry run)" if dry_run else ""
        )

        report = BatchReport()
        for mapping in mappings:
            result = self._reconciler.reconcile(mapping, dry_run=dry_run)
            logger.info("Pass 1 %s: %s", result.letter, result.outcome.value)
            report.results.append(result)

        # A dry run only queries, and queries do not take credentials.
        if report.failed and not dry_run:
            credential = self._acquire_shared_credential(report.failed_letters)
            if credential is not None:
                self._retry_failed(mappings, report, credential)

        if report.failed:
            report.succeeded = False
            logger.error(
                "Drive mapping failed for: %s",
                ", ".join(f"{letter}:" for letter in report.failed_letters),
            )
            raise AggregateBatchFailure(report)

        report.succeeded = True
        return report

    def _acquire_shared_credential(self, failed_letters: List[str]) -> Optional[Credential]:
        if self._on_failure is not None and not self._on_failure(failed_letters):
            logger.warning("Retry declined for %s", ", ".join(failed_letters))
            return None

        try:
            return self._credential_acquirer.acquire(domain_hint=self._domain_hint)
        except (EmptyUsernameError, ValidationError) as exc:
            logger.error("Credential prompt aborted: %s", exc)
            return None

    def _retry_failed(
        self,
        mappings: List[DriveMapping],
        report: BatchReport,
        credential: Credential,
    ) -> None:
        for index, (mapping, result) in enumerate(zip(mappings, report.results)):
            if result.succeeded:
                continue
            retried = self._reconciler.reconcile(mapping, credential=credential)
            logger.info("Pass 2 %s: %s", retried.letter, retried.outcome.value)
            report.results[index] = retried
