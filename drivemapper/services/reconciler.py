"""
Reconciliation of a single drive letter against its desired share.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..domain.exceptions import ProviderError
from ..domain.models import Credential, DriveMapping, MappingOutcome, MappingResult, targets_match
from .protocols import DriveProviderProtocol

logger = logging.getLogger(__name__)


class DriveReconciler:
    """
    Brings one drive letter into agreement with a desired mapping.

    Decision table:
    1. Binding already points at the target -> ALREADY_MAPPED, no mutation
    2. Dry run -> SKIPPED, no mutation
    3. Binding points elsewhere -> unbind, then bind -> REMAPPED
    4. No binding -> bind -> CREATED

    Provider failures are reported as FAILED results and never raised.
    """

    def __init__(self, provider: DriveProviderProtocol):
        self._provider = provider

    def reconcile(
        self,
        mapping: DriveMapping,
        credential: Optional[Credential] = None,
        dry_run: bool = False,
    ) -> MappingResult:
        """
        Reconcile one mapping.

        Args:
            mapping: Desired letter and share
            credential: Explicit credential for the bind, or None for the
                current security context
            dry_run: Inspect only, never bind or unbind

        Returns:
            MappingResult describing what happened

        Raises:
            ValidationError: If the mapping is malformed (before any provider call)
        """
        mapping = mapping.validated()
        letter = mapping.letter
        logger.info("Mapping %s", mapping)

        try:
            state = self._provider.query_mapping(letter)
        except ProviderError as exc:
            return self._failed(letter, "query", exc)

        if state.exists and targets_match(state.target, mapping.target_path):
            logger.info("%s: already mapped to %s", letter, state.target)
            return MappingResult(
                letter=letter,
                outcome=MappingOutcome.ALREADY_MAPPED,
                detail=f"already mapped to {state.target}",
            )

        if dry_run:
            if state.exists:
                detail = f"would remap from {state.target} to {mapping.target_path}"
            else:
                detail = f"would map to {mapping.target_path}"
            logger.info("%s: dry run, %s", letter, detail)
            return MappingResult(letter=letter, outcome=MappingOutcome.SKIPPED, detail=detail)

        remapped = False
        if state.exists:
            logger.info("%s: currently mapped to %s, removing", letter, state.target)
            try:
                self._provider.unbind(letter)
            except ProviderError as exc:
                return self._failed(letter, "unbind", exc)
            remapped = True

        try:
            self._provider.bind(letter, mapping.target_path, credential)
        except ProviderError as exc:
            return self._failed(letter, "bind", exc)

        if remapped:
            logger.info("%s: remapped to %s", letter, mapping.target_path)
            return MappingResult(
                letter=letter,
                outcome=MappingOutcome.REMAPPED,
                detail=f"remapped from {state.target} to {mapping.target_path}",
            )

        logger.info("%s: mapped to %s", letter, mapping.target_path)
        return MappingResult(
            letter=letter,
            outcome=MappingOutcome.CREATED,
            detail=f"mapped to {mapping.target_path}",
        )

    @staticmethod
    def _failed(letter: str, step: str, error: ProviderError) -> MappingResult:
        logger.error("%s: %s failed: %s", letter, step, error)
        return MappingResult(
            letter=letter,
            outcome=MappingOutcome.FAILED,
            detail=f"{step} failed: {error}",
            error=error,
        )
