"""Request and version-record construction for providerlock.

Three pure functions sit between the index and the downloader:

- :func:`build_download_request` validates an (address, version, platform)
  triple and composes a :class:`DownloadRequest`.
- :func:`build_provider_version` turns one downloader response into a
  record scoped to a single platform.
- :func:`merge_provider_versions` folds single-platform records into the
  aggregate for a version, checking that every record carries the same
  shared digest set.

None of them perform I/O.
"""

from __future__ import annotations

from typing import Dict, Optional

from providerlock.models import (
    DownloadRequest,
    DownloadResponse,
    ProviderVersion,
    parse_platform,
    parse_provider_address,
)
from providerlock.constants import H1_PREFIX
from providerlock.exceptions import (
    DigestSetMismatchError,
    DuplicatePlatformError,
    InvalidVersionError,
    MissingDigestError,
)

__all__ = [
    "build_download_request",
    "build_provider_version",
    "merge_provider_versions",
]


def build_download_request(address: str, version: str, platform: str) -> DownloadRequest:
    """Compose a download request for one (version, platform) pair.

    Args:
        address: Provider address, optionally prefixed with a registry host.
        version: Provider version, e.g. ``"3.2.1"``.
        platform: Platform token, e.g. ``"darwin_arm64"``.

    Returns:
        A fully resolved :class:`DownloadRequest`.

    Raises:
        InvalidAddressError: *address* cannot be parsed.
        InvalidPlatformError: *platform* is not a recognized ``os_arch`` pair.
        InvalidVersionError: *version* is empty.

    Example::

        >>> build_download_request("hashicorp/null", "3.2.1", "linux_amd64")
        DownloadRequest(namespace='hashicorp', type='null', version='3.2.1',
                        os='linux', arch='amd64')
    """
    provider = parse_provider_address(address)
    target = parse_platform(platform)

    if not version or not version.strip():
        raise InvalidVersionError(
            "Provider version must not be empty",
            address=address,
            platform=platform,
        )

    return DownloadRequest(
        namespace=provider.namespace,
        type=provider.type,
        version=version,
        os=target.os,
        arch=target.arch,
    )


def build_provider_version(
    address: str,
    version: str,
    platform: str,
    response: DownloadResponse,
) -> ProviderVersion:
    """Build a single-platform :class:`ProviderVersion` from a response.

    The shared digest set is copied verbatim, including entries for
    platforms other than *platform*.

    Raises:
        MissingDigestError: The response has no ``h1:`` digest, or its
            shared digest set has no entry for *platform*.
    """
    h1 = response.h1_digest
    if not h1 or not h1.startswith(H1_PREFIX):
        raise MissingDigestError(
            "Download response has no h1 digest",
            address=address,
            version=version,
            platform=platform,
        )

    if platform not in response.shared_digests:
        raise MissingDigestError(
            "Shared digest set has no entry for the requested platform",
            address=address,
            version=version,
            platform=platform,
        )

    return ProviderVersion(
        address=address,
        version=version,
        platforms=(platform,),
        h1_hashes={platform: h1},
        zh_hashes=response.shared_digests,
    )


def merge_provider_versions(
    acc: Optional[ProviderVersion],
    record: ProviderVersion,
) -> ProviderVersion:
    """Fold a single-platform *record* into the running aggregate *acc*.

    The first record seeds the aggregate, including its shared digest set.
    Each following record appends its platforms and ``h1:`` digests; its
    shared digest set must equal the one already held.

    Args:
        acc: Aggregate built so far, or ``None`` before the first record.
        record: Record for the next platform.

    Returns:
        A new aggregate; neither argument is modified.

    Raises:
        DuplicatePlatformError: *record* repeats an aggregated platform.
        DigestSetMismatchError: *record* carries a different shared digest set.
    """
    if acc is None:
        return record

    if (acc.address, acc.version) != (record.address, record.version):
        raise ValueError(
            f"Cannot merge {record.address}@{record.version} "
            f"into {acc.address}@{acc.version}"
        )

    for platform in record.platforms:
        if platform in acc.h1_hashes:
            raise DuplicatePlatformError(
                "Platform resolved more than once",
                address=acc.address,
                version=acc.version,
                platform=platform,
            )

    if record.zh_hashes != acc.zh_hashes:
        raise DigestSetMismatchError(
            "Shared digest set differs between platforms of the same version",
            address=acc.address,
            version=acc.version,
            platform=", ".join(record.platforms),
        )

    h1_hashes: Dict[str, str] = dict(acc.h1_hashes)
    h1_hashes.update(record.h1_hashes)

    return ProviderVersion(
        address=acc.address,
        version=acc.version,
        platforms=acc.platforms + record.platforms,
        h1_hashes=h1_hashes,
        zh_hashes=acc.zh_hashes,
    )
