"""
Provider version record for providerlock.

A :class:`ProviderVersion` is the aggregated, immutable result of resolving
one provider version across one or more platforms. It holds both digest
families a lock entry needs:

- ``h1_hashes``: one ``h1:`` digest per resolved platform.
- ``zh_hashes``: the release's shared ``zh:`` digest set, copied verbatim
  from upstream. It may list platforms that were never requested.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence

from providerlock.exceptions import DuplicatePlatformError, MissingDigestError


@dataclass(frozen=True)
class ProviderVersion:
    """
    Immutable per-version digest record.

    The constructor copies its collections: ``platforms`` becomes a tuple
    and both hash mappings become read-only views, so a record can be
    shared between callers without defensive copies.

    Attributes:
        address: Provider address exactly as the caller supplied it.
        version: Provider version.
        platforms: Resolved platform tokens in resolution order.
        h1_hashes: Platform token → ``h1:`` digest, one per platform.
        zh_hashes: Platform token → ``zh:`` digest, as published upstream.

    Raises:
        DuplicatePlatformError: ``platforms`` contains a token twice.
        MissingDigestError: ``platforms`` and ``h1_hashes`` disagree.
    """

    address: str
    version: str
    platforms: Sequence[str] = ()
    h1_hashes: Mapping[str, str] = field(default_factory=dict)
    zh_hashes: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        platforms = tuple(self.platforms)

        seen = set()
        for platform in platforms:
            if platform in seen:
                raise DuplicatePlatformError(
                    "Platform resolved more than once",
                    address=self.address,
                    version=self.version,
                    platform=platform,
                )
            seen.add(platform)

        missing = seen.symmetric_difference(self.h1_hashes)
        if missing:
            raise MissingDigestError(
                "Resolved platforms and h1 digests do not match",
                address=self.address,
                version=self.version,
                platform=", ".join(sorted(missing)),
            )

        object.__setattr__(self, "platforms", platforms)
        object.__setattr__(self, "h1_hashes", MappingProxyType(dict(self.h1_hashes)))
        object.__setattr__(self, "zh_hashes", MappingProxyType(dict(self.zh_hashes)))

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def hashes(self) -> List[str]:
        """
        Return every digest of this version in lock-entry order.

        ``h1:`` digests come first, then ``zh:`` digests, each group
        sorted and de-duplicated.

        Returns:
            List of digest strings.
        """
        h1 = sorted(set(self.h1_hashes.values()))
        zh = sorted(set(self.zh_hashes.values()))
        return h1 + zh

    def to_dict(self) -> Dict[str, Any]:
        """Return a plain-data copy suitable for serializers."""
        return {
            "address": self.address,
            "version": self.version,
            "platforms": list(self.platforms),
            "h1_hashes": dict(self.h1_hashes),
            "zh_hashes": dict(self.zh_hashes),
        }
