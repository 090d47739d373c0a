"""
Core functionality exports for providerlock.

This module provides convenient access to the core subsystems of providerlock.
Importing from here keeps user-facing imports clean and stable:

    from providerlock.core import LockIndex, RegistryDownloader
"""

from __future__ import annotations

from providerlock.core.index import LockIndex, ProviderIndex
from providerlock.core.release import GitHubRelease, GitLabRelease
from providerlock.core.downloader import ProviderDownloader, RegistryDownloader
from providerlock.core.builder import (
    build_download_request,
    build_provider_version,
    merge_provider_versions,
)

__all__ = [
    "LockIndex",
    "ProviderIndex",
    "ProviderDownloader",
    "RegistryDownloader",
    "GitHubRelease",
    "GitLabRelease",
    "build_download_request",
    "build_provider_version",
    "merge_provider_versions",
]
