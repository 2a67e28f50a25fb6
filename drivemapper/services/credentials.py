"""
Interactive credential acquisition for drive mappings.

The acquirer resolves the principal the way Windows logon prompts do:
a configured domain wins over a domain typed by the user, and a bare
username falls back to the domain of the current environment.
"""

from __future__ import annotations

import logging
import os
import platform
from typing import Optional

import typer
from pydantic import SecretStr

from ..domain.exceptions import EmptyUsernameError
from ..domain.models import DOMAIN_SEPARATOR, Credential
from .protocols import CredentialPrompterProtocol

logger = logging.getLogger(__name__)


def resolve_environment_domain() -> str:
    """
    Determine the logon domain of the current environment.

    Uses ``USERDOMAIN`` when set, otherwise the short host name (which is
    what Windows reports for machines outside a domain).
    """
    domain = os.environ.get("USERDOMAIN", "").strip()
    if domain:
        return domain
    return platform.node().split(".")[0].upper() or "WORKGROUP"


class TyperCredentialPrompter:
    """Console prompter backed by ``typer.prompt``."""

    def prompt_username(self) -> str:
        return typer.prompt("Username", default="", show_default=False)

    def prompt_secret(self, principal: str) -> str:
        return typer.prompt(f"Password for {principal}", hide_input=True)


class CredentialAcquirer:
    """
    Obtains a ``Credential`` from the user.

    The environment domain is captured once when the acquirer is built so
    that a single batch never mixes domains.
    """

    def __init__(
        self,
        prompter: Optional[CredentialPrompterProtocol] = None,
        environment_domain: Optional[str] = None,
    ):
        """
        Initialize the acquirer.

        Args:
            prompter: Input channel for username and secret
            environment_domain: Domain used for bare usernames when no hint
                is supplied. Defaults to ``resolve_environment_domain()``.
        """
        self.prompter = prompter or TyperCredentialPrompter()
        self.environment_domain = environment_domain or resolve_environment_domain()

    def acquire(self, domain_hint: Optional[str] = None) -> Credential:
        """
        Prompt for a username and password and build a credential.

        Args:
            domain_hint: Domain that overrides whatever domain the user types

        Returns:
            Credential with a ``DOMAIN\\username`` principal

        Raises:
            EmptyUsernameError: If the username is blank
            ValidationError: If the resulting principal is malformed
        """
        username = (self.prompter.prompt_username() or "").strip()
        if not username:
            raise EmptyUsernameError("Username must not be empty")

        principal = self._resolve_principal(username, domain_hint)
        secret = SecretStr(self.prompter.prompt_secret(principal))
        credential = Credential(principal=principal, secret=secret)

        logger.info("Using credentials for %s", credential.principal)
        return credential

    def _resolve_principal(self, username: str, domain_hint: Optional[str]) -> str:
        domain_hint = (domain_hint or "").strip()

        if domain_hint:
            if DOMAIN_SEPARATOR in username:
                typed = username
                username = username.rsplit(DOMAIN_SEPARATOR, 1)[1]
                logger.warning(
                    "Domain in '%s' ignored; configured domain '%s' takes precedence",
                    typed,
                    domain_hint,
                )
            return f"{domain_hint}{DOMAIN_SEPARATOR}{username}"

        if DOMAIN_SEPARATOR in username:
            return username

        return f"{self.environment_domain}{DOMAIN_SEPARATOR}{username}"
