"""Per-run provider version index for providerlock.

Resolving a provider version means one downloader round-trip per platform,
so the index memoizes finished :class:`ProviderVersion` records by version
and makes sure a version is never fetched twice in one run.

Typical usage::

    from providerlock.utils.http import HTTPClient
    from providerlock.core import LockIndex, RegistryDownloader

    async with HTTPClient() as client:
        index = LockIndex(RegistryDownloader(client))
        record = await index.resolve(
            "hashicorp/null", "3.2.1", ["linux_amd64", "darwin_arm64"]
        )
        print(record.hashes())

The index caches by version only. A cache hit returns the stored record as
is, even if the caller now asks for platforms the first resolution did not
include; callers are expected to resolve a version against one platform
set per run.
"""

from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from providerlock.models import DownloadRequest, ProviderVersion
from providerlock.models.address import parse_provider_address
from providerlock.core.downloader import ProviderDownloader
from providerlock.exceptions import DuplicatePlatformError, ProviderDownloadError
from providerlock.core.builder import (
    build_download_request,
    build_provider_version,
    merge_provider_versions,
)
from providerlock.utils.logger import get_logger

logger = get_logger("index")

# Public API
__all__ = ["ProviderIndex", "LockIndex"]


# ---------------------------------------------------------------------------
# Single-provider index
# ---------------------------------------------------------------------------


class ProviderIndex:
    """Async-safe cache of resolved versions for one provider address.

    Each version triggers **at most one** download sequence. While a
    version is being resolved, further callers for the same version wait
    on the in-flight resolution instead of starting their own, and then
    observe its outcome: the stored record, the error that aborted it, or
    its cancellation. Different versions resolve independently.

    A failed or cancelled resolution stores nothing, so the next call for
    that version starts over with every platform.

    Args:
        address: Provider address, used verbatim in every record.
        downloader: Collaborator that fetches one (version, platform) pair.

    Example::

        index = ProviderIndex("hashicorp/null", downloader)
        first = await index.resolve("3.2.1", ["linux_amd64"])
        again = await index.resolve("3.2.1", ["linux_amd64"])  # no I/O
        assert first == again
    """

    def __init__(self, address: str, downloader: ProviderDownloader) -> None:
        self.address = address
        self.downloader = downloader

        # Finished records: version → aggregate across requested platforms
        self._versions: Dict[str, ProviderVersion] = {}

        # In-flight resolutions: version → future shared with waiters
        self._pending: Dict[str, "asyncio.Future[ProviderVersion]"] = {}

    # ------------------------------------------------------------------
    # Public async API
    # ------------------------------------------------------------------

    async def resolve(self, version: str, platforms: Iterable[str]) -> ProviderVersion:
        """Return the record for *version*, downloading it on first use.

        On a miss every platform is validated before any download starts,
        then each platform is downloaded in the given order and folded into
        one record. The first failure aborts the whole resolution.

        Args:
            version: Provider version, e.g. ``"3.2.1"``.
            platforms: Platform tokens to resolve, e.g. ``["linux_amd64"]``.

        Returns:
            The :class:`ProviderVersion` for *version*; its ``platforms``
            keep the order they were requested in.

        Raises:
            InvalidAddressError: The index's address cannot be parsed.
            InvalidPlatformError: A platform token is not recognized.
            InvalidVersionError: *version* is empty.
            DuplicatePlatformError: A platform is listed twice.
            MissingDigestError: A response lacks a digest for its platform.
            DigestSetMismatchError: Platforms disagree on the shared digest set.
            ProviderDownloadError: The downloader failed for a platform.
            asyncio.CancelledError: The resolution this call was part of
                was cancelled.
        """
        # Fast path: already resolved
        cached = self._versions.get(version)
        if cached is not None:
            logger.debug("Cache hit for %s %s", self.address, version)
            return cached

        # Someone else is resolving this version: share their outcome
        pending = self._pending.get(version)
        if pending is not None:
            logger.debug("Waiting on in-flight resolution of %s %s", self.address, version)
            return await asyncio.shield(pending)

        # Caller errors surface here, before anything is registered or fetched
        requests = self._build_requests(version, platforms)

        pending = asyncio.get_running_loop().create_future()
        self._pending[version] = pending

        try:
            record = await self._download_all(version, requests)
        except Exception as exc:
            logger.debug(
                "Discarding partial resolution of %s %s: %s",
                self.address,
                version,
                exc,
            )
            pending.set_exception(exc)
            # Mark as retrieved; waiters still receive it
            pending.exception()
            raise
        else:
            self._versions[version] = record
            pending.set_result(record)
            return record
        finally:
            del self._pending[version]
            if not pending.done():
                # Cancelled (or interrupted) before finishing
                pending.cancel()

    # ------------------------------------------------------------------
    # Public synchronous accessors (cache-only, no I/O)
    # ------------------------------------------------------------------

    def get_cached(self, version: str) -> Optional[ProviderVersion]:
        """Return the stored record for *version*, or ``None``."""
        return self._versions.get(version)

    def cached_versions(self) -> List[str]:
        """Return the resolved versions in resolution order."""
        return list(self._versions)

    def is_resolving(self, version: str) -> bool:
        """Return True while *version* has a resolution in flight."""
        return version in self._pending

    def __contains__(self, version: object) -> bool:
        return version in self._versions

    def __len__(self) -> int:
        return len(self._versions)

    # ------------------------------------------------------------------
    # Resolution helpers (private)
    # ------------------------------------------------------------------

    def _build_requests(
        self,
        version: str,
        platforms: Iterable[str],
    ) -> List[Tuple[str, DownloadRequest]]:
        """Validate every platform and build its request, without I/O."""
        requests: List[Tuple[str, DownloadRequest]] = []
        seen = set()

        for platform in platforms:
            if platform in seen:
                raise DuplicatePlatformError(
                    "Platform requested more than once",
                    address=self.address,
                    version=version,
                    platform=platform,
                )
            seen.add(platform)
            requests.append(
                (platform, build_download_request(self.address, version, platform))
            )

        return requests

    async def _download_all(
        self,
        version: str,
        requests: Sequence[Tuple[str, DownloadRequest]],
    ) -> ProviderVersion:
        """Download each platform in order and fold the results."""
        aggregate: Optional[ProviderVersion] = None

        for platform, request in requests:
            logger.debug("Resolving %s %s for %s", self.address, version, platform)
            try:
                response = await self.downloader.download(request)
            except Exception as exc:
                raise ProviderDownloadError(
                    f"Failed to download {self.address} {version} for {platform}",
                    address=self.address,
                    version=version,
                    platform=platform,
                    original_error=exc,
                ) from exc

            record = build_provider_version(self.address, version, platform, response)
            aggregate = merge_provider_versions(aggregate, record)

        if aggregate is None:
            return ProviderVersion(address=self.address, version=version)
        return aggregate


# ---------------------------------------------------------------------------
# Multi-provider index
# ---------------------------------------------------------------------------


class LockIndex:
    """Version indexes for every provider used in one run.

    Construct one per run and pass it to everything that resolves
    provider versions; the cache lives exactly as long as this object.

    Addresses are keyed by their fully-qualified form, so
    ``hashicorp/null`` and ``registry.terraform.io/hashicorp/null`` share
    one index. Returned records still carry the spelling the caller used.

    Args:
        downloader: Collaborator shared by every provider index.
    """

    def __init__(self, downloader: ProviderDownloader) -> None:
        self.downloader = downloader
        self._providers: Dict[str, ProviderIndex] = {}

    def provider(self, address: str) -> ProviderIndex:
        """Return the :class:`ProviderIndex` for *address*, creating it once.

        Raises:
            InvalidAddressError: *address* cannot be parsed.
        """
        key = str(parse_provider_address(address))
        index = self._providers.get(key)
        if index is None:
            index = ProviderIndex(address, self.downloader)
            self._providers[key] = index
        return index

    async def resolve(
        self,
        address: str,
        version: str,
        platforms: Iterable[str],
    ) -> ProviderVersion:
        """Resolve *version* of *address*; see :meth:`ProviderIndex.resolve`."""
        record = await self.provider(address).resolve(version, platforms)
        return _with_address(record, address)

    def get_cached(self, address: str, version: str) -> Optional[ProviderVersion]:
        """Return a stored record without triggering a download.

        Raises:
            InvalidAddressError: *address* cannot be parsed.
        """
        index = self._providers.get(str(parse_provider_address(address)))
        record = index.get_cached(version) if index else None
        return _with_address(record, address) if record is not None else None

    def addresses(self) -> List[str]:
        """Return the fully-qualified addresses seen so far."""
        return list(self._providers)


def _with_address(record: ProviderVersion, address: str) -> ProviderVersion:
    """Return *record* as seen under the caller's *address* spelling."""
    if record.address == address:
        return record
    return replace(record, address=address)
