"""
Protocols describing the collaborators the mapping services depend on.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..domain.models import BindingState, Credential


class DriveProviderProtocol(Protocol):
    """
    Protocol describing the OS mapping facility needed by the reconciler.

    Every method raises ``ProviderError`` when the underlying call fails.
    """

    def query_mapping(self, letter: str) -> BindingState:
        """Return the current binding of ``letter``."""

    def bind(self, letter: str, target: str, credential: Optional[Credential] = None) -> None:
        """Bind ``letter`` to ``target``, optionally as ``credential``."""

    def unbind(self, letter: str) -> None:
        """Remove the binding of ``letter``."""


class CredentialPrompterProtocol(Protocol):
    """Interactive input channel used to collect credentials."""

    def prompt_username(self) -> str:
        """Ask for a username (may include a DOMAIN\\ prefix)."""

    def prompt_secret(self, principal: str) -> str:
        """Ask for the password of ``principal`` without echoing it."""
