"""
Adapters layer - OS integrations for drive mapping.
"""

from .mock_drive_provider import MockDriveProvider
from .net_use_provider import NetUseDriveProvider
from .provider_factory import create_drive_provider

__all__ = ["MockDriveProvider", "NetUseDriveProvider", "create_drive_provider"]
