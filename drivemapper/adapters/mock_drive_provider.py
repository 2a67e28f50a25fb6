"""
In-memory drive provider for testing without touching the OS.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from ..domain.exceptions import ProviderError
from ..domain.models import BindingState, Credential


class MockDriveProvider:
    """
    Mock provider that simulates drive bindings in a dictionary.

    Failures can be injected per letter:
    - ``fail_letters``: every bind of these letters fails
    - ``require_credential``: binds fail unless a credential is passed,
      like a share that rejects the logon account
    - ``fail_unbind``: unbinding these letters fails
    - ``fail_query``: querying these letters fails

    Every call is recorded in ``calls`` as ``(operation, letter)``.
    """

    def __init__(
        self,
        bindings: Optional[Dict[str, str]] = None,
        fail_letters: Iterable[str] = (),
        require_credential: Iterable[str] = (),
        fail_unbind: Iterable[str] = (),
        fail_query: Iterable[str] = (),
    ):
        """
        Initialize the mock provider.

        Args:
            bindings: Initial letter -> share bindings
            fail_letters: Letters whose bind always fails
            require_credential: Letters whose bind fails without a credential
            fail_unbind: Letters whose unbind fails
            fail_query: Letters whose query fails
        """
        self.bindings: Dict[str, str] = {
            letter.upper(): target for letter, target in (bindings or {}).items()
        }
        self.fail_letters = {letter.upper() for letter in fail_letters}
        self.require_credential = {letter.upper() for letter in require_credential}
        self.fail_unbind = {letter.upper() for letter in fail_unbind}
        self.fail_query = {letter.upper() for letter in fail_query}
        self.calls: List[Tuple[str, str]] = []
        self.credentials_used: List[Optional[Credential]] = []

    def query_mapping(self, letter: str) -> BindingState:
        self.calls.append(("query", letter))
        if letter in self.fail_query:
            raise ProviderError(f"Simulated query failure for {letter}:", letter=letter)
        target = self.bindings.get(letter)
        return BindingState(exists=target is not None, target=target)

    def bind(self, letter: str, target: str, credential: Optional[Credential] = None) -> None:
        self.calls.append(("bind", letter))
        self.credentials_used.append(credential)
        if letter in self.fail_letters:
            raise ProviderError(f"Simulated bind failure for {letter}:", letter=letter)
        if letter in self.require_credential and credential is None:
            raise ProviderError(f"Access denied to {target}", letter=letter)
        if letter in self.bindings:
            raise ProviderError(f"The local device name {letter}: is already in use", letter=letter)
        self.bindings[letter] = target

    def unbind(self, letter: str) -> None:
        self.calls.append(("unbind", letter))
        if letter in self.fail_unbind:
            raise ProviderError(f"Simulated unbind failure for {letter}:", letter=letter)
        if letter not in self.bindings:
            raise ProviderError(f"The network connection {letter}: could not be found", letter=letter)
        del self.bindings[letter]

    def mutation_calls(self) -> List[Tuple[str, str]]:
        """Calls that change bindings (bind/unbind)."""
        return [call for call in self.calls if call[0] in ("bind", "unbind")]
