"""
Unified data model exports for providerlock.

This module re-exports all core data models to provide a stable and
convenient public API. Users can import models directly from
``providerlock.models`` instead of individual submodules.

Example:
    >>> from providerlock.models import ProviderVersion, parse_platform
"""

from __future__ import annotations

from providerlock.models.version import ProviderVersion
from providerlock.models.platform import Platform, parse_platform
from providerlock.models.download import DownloadRequest, DownloadResponse
from providerlock.models.address import ProviderAddress, parse_provider_address

__all__ = [
    "ProviderAddress",
    "parse_provider_address",
    "Platform",
    "parse_platform",
    "DownloadRequest",
    "DownloadResponse",
    "ProviderVersion",
]
