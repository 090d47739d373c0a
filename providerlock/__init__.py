"""
providerlock: checksum resolution for provider lock entries

providerlock resolves, for a provider address and version, every
per-platform checksum a dependency lock entry needs:

    • ``h1:`` digests of each platform's unpacked package
    • ``zh:`` digests of every published zip, taken from the release's
      ``SHA256SUMS`` document

Resolved versions are memoized by an explicit :class:`LockIndex`, so one
run never downloads the same version twice, even when many call sites
ask for it concurrently.
"""

from __future__ import annotations

from providerlock.__version__ import __version__
from providerlock.core import LockIndex, ProviderIndex, RegistryDownloader
from providerlock.models import DownloadRequest, DownloadResponse, ProviderVersion

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "providerlock Contributors"
__license__ = "Apache-2.0"
__description__ = "Resolve and cache per-platform provider checksums for lock files."

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

__all__ = [
    "__version__",
    "LockIndex",
    "ProviderIndex",
    "RegistryDownloader",
    "DownloadRequest",
    "DownloadResponse",
    "ProviderVersion",
]
