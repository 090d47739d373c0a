"""
Provider address model for providerlock.

A provider address is a slash-delimited identifier such as
``hashicorp/null`` or ``registry.terraform.io/hashicorp/null``. Only the
final two segments (namespace and type) identify the provider; an
optional leading segment names the registry host.
"""

from __future__ import annotations

from dataclasses import dataclass

from providerlock.exceptions import InvalidAddressError
from providerlock.constants import (
    DEFAULT_REGISTRY_HOST,
    LEGACY_NAMESPACE,
    UNKNOWN_NAMESPACE,
)


@dataclass(frozen=True)
class ProviderAddress:
    """
    Parsed provider address.

    Attributes:
        namespace: Organization or user that publishes the provider.
        type: Provider type name, e.g. ``null``.
        hostname: Registry host the provider is published on.
    """

    namespace: str
    type: str
    hostname: str = DEFAULT_REGISTRY_HOST

    def __str__(self) -> str:
        return f"{self.hostname}/{self.namespace}/{self.type}"

    @property
    def short(self) -> str:
        """Address without the registry host (``namespace/type``)."""
        return f"{self.namespace}/{self.type}"


def parse_provider_address(address: str) -> ProviderAddress:
    """
    Parse a provider address into its namespace and type.

    Args:
        address: Address string, optionally prefixed with a registry host.

    Returns:
        Parsed :class:`ProviderAddress`.

    Raises:
        InvalidAddressError: The address has fewer than two or more than
            three segments, an empty namespace or type, or a legacy /
            unknown namespace marker.

    Examples:
        >>> parse_provider_address("registry.terraform.io/hashicorp/null").short
        'hashicorp/null'
        >>> parse_provider_address("hashicorp/null").hostname
        'registry.terraform.io'
    """
    parts = address.split("/")

    if len(parts) < 2:
        raise InvalidAddressError(
            "Provider address must contain a namespace and a type",
            address=address,
        )
    if len(parts) > 3:
        raise InvalidAddressError(
            "Provider address has too many segments",
            address=address,
        )

    hostname = parts[0] if len(parts) == 3 else DEFAULT_REGISTRY_HOST
    namespace, type_name = parts[-2], parts[-1]

    if not hostname:
        raise InvalidAddressError("Registry host must not be empty", address=address)
    if not namespace:
        raise InvalidAddressError("Provider namespace must not be empty", address=address)
    if namespace == LEGACY_NAMESPACE:
        raise InvalidAddressError(
            "Legacy provider namespace is not supported",
            address=address,
        )
    if namespace == UNKNOWN_NAMESPACE:
        raise InvalidAddressError("Provider namespace is unknown", address=address)
    if not type_name:
        raise InvalidAddressError("Provider type must not be empty", address=address)

    return ProviderAddress(namespace=namespace, type=type_name, hostname=hostname)
