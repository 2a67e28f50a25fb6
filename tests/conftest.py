"""
Shared fixtures for drivemapper tests.
"""

import logging
from typing import List, Optional

import pytest

from drivemapper.adapters.mock_drive_provider import MockDriveProvider
from drivemapper.logging_config import LOGGER_NAME
from drivemapper.services.credentials import CredentialAcquirer
from drivemapper.services.reconciler import DriveReconciler


class StubPrompter:
    """Minimal stub matching CredentialPrompterProtocol."""

    def __init__(self, usernames: List[str], secret: str = "s3cret-Pa55"):
        self._usernames = list(usernames)
        self.secret = secret
        self.username_prompts = 0
        self.secret_prompts: List[str] = []

    def prompt_username(self) -> str:
        self.username_prompts += 1
        return self._usernames.pop(0)

    def prompt_secret(self, principal: str) -> str:
        self.secret_prompts.append(principal)
        return self.secret


class CountingAcquirer(CredentialAcquirer):
    """Credential acquirer that records how often it was asked."""

    def __init__(self, prompter: StubPrompter, environment_domain: str = "CORP"):
        super().__init__(prompter=prompter, environment_domain=environment_domain)
        self.calls: List[Optional[str]] = []

    def acquire(self, domain_hint=None):
        self.calls.append(domain_hint)
        return super().acquire(domain_hint=domain_hint)


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Undo handlers installed by setup_logging during CLI tests."""
    yield
    app_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(app_logger.handlers):
        app_logger.removeHandler(handler)
        handler.close()
    app_logger.setLevel(logging.NOTSET)


@pytest.fixture
def provider() -> MockDriveProvider:
    return MockDriveProvider()


@pytest.fixture
def reconciler(provider: MockDriveProvider) -> DriveReconciler:
    return DriveReconciler(provider)


@pytest.fixture
def prompter() -> StubPrompter:
    return StubPrompter(usernames=["jdoe"])


@pytest.fixture
def acquirer(prompter: StubPrompter) -> CountingAcquirer:
    return CountingAcquirer(prompter)
