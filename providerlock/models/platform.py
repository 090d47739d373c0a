"""
Platform model for providerlock.

A platform is an operating-system / architecture pair written as a single
``os_arch`` token, e.g. ``darwin_arm64``.
"""

from __future__ import annotations

from dataclasses import dataclass

from providerlock.exceptions import InvalidPlatformError
from providerlock.constants import KNOWN_ARCH, KNOWN_OS, PLATFORM_SEPARATOR


@dataclass(frozen=True)
class Platform:
    """
    One build target of a provider package.

    Attributes:
        os: Operating system, e.g. ``linux``.
        arch: CPU architecture, e.g. ``amd64``.
    """

    os: str
    arch: str

    def __str__(self) -> str:
        return f"{self.os}{PLATFORM_SEPARATOR}{self.arch}"


def parse_platform(token: str) -> Platform:
    """
    Parse an ``os_arch`` token into a :class:`Platform`.

    Both parts must come from the recognized vocabularies so that a typo
    fails here instead of producing an empty digest set later.

    Args:
        token: Platform token such as ``linux_amd64``.

    Returns:
        Parsed :class:`Platform`.

    Raises:
        InvalidPlatformError: The token is not exactly two non-empty parts,
            or either part is not a recognized OS / architecture.

    Examples:
        >>> parse_platform("darwin_arm64")
        Platform(os='darwin', arch='arm64')
    """
    parts = token.split(PLATFORM_SEPARATOR)

    if len(parts) != 2 or not all(parts):
        raise InvalidPlatformError(
            "Platform must be in the form os_arch",
            platform=token,
        )

    os_name, arch = parts
    if os_name not in KNOWN_OS:
        raise InvalidPlatformError(
            f"Unknown operating system '{os_name}'",
            platform=token,
        )
    if arch not in KNOWN_ARCH:
        raise InvalidPlatformError(
            f"Unknown architecture '{arch}'",
            platform=token,
        )

    return Platform(os=os_name, arch=arch)
