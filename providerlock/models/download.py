"""
Download request and response models exchanged with a downloader.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class DownloadRequest:
    """
    Fully resolved request for one (version, platform) pair.

    Attributes:
        namespace: Provider namespace.
        type: Provider type.
        version: Provider version.
        os: Target operating system.
        arch: Target architecture.
    """

    namespace: str
    type: str
    version: str
    os: str
    arch: str

    @property
    def platform(self) -> str:
        """The request's platform as an ``os_arch`` token."""
        return f"{self.os}_{self.arch}"


@dataclass(frozen=True)
class DownloadResponse:
    """
    Digest data a downloader returns for one (version, platform) pair.

    Attributes:
        h1_digest: ``h1:`` digest of the platform's unpacked package.
        shared_digests: ``zh:`` digests keyed by platform token, covering
            every platform listed in the release's checksum document.
        filename: Name of the downloaded package archive.
        shasum: Hex SHA-256 of the archive as published by the registry.
    """

    h1_digest: str
    shared_digests: Mapping[str, str] = field(default_factory=dict)
    filename: Optional[str] = None
    shasum: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "shared_digests", MappingProxyType(dict(self.shared_digests))
        )
