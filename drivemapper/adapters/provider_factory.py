"""Drive provider creation."""

from __future__ import annotations

import logging
import platform

from ..domain.exceptions import UnsupportedPlatformError
from ..services.protocols import DriveProviderProtocol

logger = logging.getLogger(__name__)


def create_drive_provider(
    mock: bool = False,
    persistent: bool = True,
    timeout_seconds: float = 60.0,
) -> DriveProviderProtocol:
    """
    Create the drive provider for this host.

    Args:
        mock: Use the in-memory provider instead of the OS
        persistent: Ask Windows to restore mappings at next logon
        timeout_seconds: Per-command timeout for ``net use``

    Raises:
        UnsupportedPlatformError: If not mocking and the host is not Windows
    """
    if mock:
        from .mock_drive_provider import MockDriveProvider
        logger.debug("Using in-memory drive provider")
        return MockDriveProvider()

    system = platform.system()
    if system != "Windows":
        raise UnsupportedPlatformError(
            f"Drive mapping is only supported on Windows (detected {system or 'unknown'}). "
            "Use --mock to simulate."
        )

    from .net_use_provider import NetUseDriveProvider
    return NetUseDriveProvider(persistent=persistent, timeout_seconds=timeout_seconds)
