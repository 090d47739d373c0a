"""
Custom exception hierarchy for providerlock.

This module defines structured exception types used across providerlock.
All exceptions inherit from :class:`ProviderLockError` and support optional
structured metadata via the ``details`` attribute to improve diagnostics
and logging.

Request errors (bad address, platform, or version, duplicate platforms)
are raised before any I/O happens. Digest errors signal inconsistent data
from upstream. Transport errors wrap whatever the downloader raised.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional


class ProviderLockError(Exception):
    """Base exception for all providerlock errors.

    All providerlock-specific exceptions should inherit from this class.
    It supports structured metadata via ``details`` for richer error
    reporting and debugging.

    Args:
        message: Human-readable error message.
        details: Optional structured metadata describing the error.
    """

    __slots__ = ("message", "details")

    def __init__(
        self,
        message: str,
        details: Optional[Mapping[str, Any]] = None,
    ) -> None:
        self.message: str = message
        # Internally normalize to a mutable dict
        self.details: MutableMapping[str, Any] = dict(details) if details else {}
        super().__init__(message)

    def __str__(self) -> str:
        if not self.details:
            return self.message
        formatted = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.message} ({formatted})"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, details={dict(self.details)!r})"
        )


def _add_if(details: MutableMapping[str, Any], key: str, value: Any) -> None:
    """Add a key to ``details`` only if ``value`` is not ``None``."""
    if value is not None:
        details[key] = value


def _truncate(text: str, max_length: int = 200) -> str:
    """Truncate long text for safe logging or error reporting."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


# ---------------------------------------------------------------------------
# Caller errors (rejected before any I/O)
# ---------------------------------------------------------------------------


class RequestError(ProviderLockError):
    """Raised when a resolution request is malformed.

    Args:
        message: Error description.
        address: Provider address involved.
        version: Provider version involved.
        platform: Platform token involved.
    """

    __slots__ = ("address", "version", "platform")

    def __init__(
        self,
        message: str,
        *,
        address: Optional[str] = None,
        version: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "address", address)
        _add_if(details, "version", version)
        _add_if(details, "platform", platform)

        super().__init__(message, details)

        self.address = address
        self.version = version
        self.platform = platform


class InvalidAddressError(RequestError):
    """Raised when a provider address cannot be parsed."""


class InvalidPlatformError(RequestError):
    """Raised when a platform token is not a recognized ``os_arch`` pair."""


class InvalidVersionError(RequestError):
    """Raised when a provider version is empty."""


class DuplicatePlatformError(RequestError):
    """Raised when the same platform is requested more than once."""


# ---------------------------------------------------------------------------
# Upstream data-consistency faults
# ---------------------------------------------------------------------------


class DigestError(ProviderLockError):
    """Raised when upstream digest data is missing or inconsistent.

    Args:
        message: Error description.
        address: Provider address involved.
        version: Provider version involved.
        platform: Platform whose digests triggered the fault.
    """

    __slots__ = ("address", "version", "platform")

    def __init__(
        self,
        message: str,
        *,
        address: Optional[str] = None,
        version: Optional[str] = None,
        platform: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "address", address)
        _add_if(details, "version", version)
        _add_if(details, "platform", platform)

        super().__init__(message, details)

        self.address = address
        self.version = version
        self.platform = platform


class MissingDigestError(DigestError):
    """Raised when a download response lacks a digest for its platform."""


class DigestSetMismatchError(DigestError):
    """Raised when one version publishes different shared digest sets."""


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------


class NetworkError(ProviderLockError):
    """Raised when HTTP or network operations fail.

    Args:
        message: Error description.
        url: URL being accessed.
        status_code: HTTP status code, if available.
        response_body: Raw response body, truncated for safety.
    """

    __slots__ = ("url", "status_code", "response_body")

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "url", url)
        _add_if(details, "status_code", status_code)

        if response_body is not None:
            details["response"] = _truncate(response_body)

        super().__init__(message, details)

        self.url = url
        self.status_code = status_code
        self.response_body = response_body


class RegistryError(NetworkError):
    """Raised for failures related to the provider registry API.

    Args:
        message: Error description.
        provider: Provider (``namespace/type``) involved.
        **kwargs: Additional arguments forwarded to ``NetworkError``.
    """

    __slots__ = ("provider",)

    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)

        self.provider = provider
        if provider is not None:
            self.details["provider"] = provider


class ChecksumMismatchError(RegistryError):
    """Raised when a downloaded package does not match its published shasum."""


class ProviderDownloadError(ProviderLockError):
    """Raised when the downloader fails for one platform of a resolution.

    Wraps the downloader's own exception (available as ``original_error``
    and as ``__cause__``) with the address, version, and platform that
    were being resolved.

    Args:
        message: Error description.
        address: Provider address being resolved.
        version: Provider version being resolved.
        platform: Platform whose download failed.
        original_error: Exception raised by the downloader.
    """

    __slots__ = ("address", "version", "platform", "original_error")

    def __init__(
        self,
        message: str,
        *,
        address: Optional[str] = None,
        version: Optional[str] = None,
        platform: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "address", address)
        _add_if(details, "version", version)
        _add_if(details, "platform", platform)
        _add_if(
            details,
            "original_error",
            str(original_error) if original_error else None,
        )

        super().__init__(message, details)

        self.address = address
        self.version = version
        self.platform = platform
        self.original_error = original_error


class ReleaseNotFoundError(ProviderLockError):
    """Raised when a release source has no published releases.

    Args:
        message: Error description.
        source: Release source identifier (``owner/project``).
    """

    __slots__ = ("source",)

    def __init__(self, message: str, *, source: Optional[str] = None) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "source", source)

        super().__init__(message, details)

        self.source = source


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigError(ProviderLockError):
    """Raised when a configuration file is unreadable or invalid.

    Args:
        message: Error description.
        config_path: Path of the configuration file involved.
        option: Name of the offending option, if any.
    """

    __slots__ = ("config_path", "option")

    def __init__(
        self,
        message: str,
        *,
        config_path: Optional[str] = None,
        option: Optional[str] = None,
    ) -> None:
        details: MutableMapping[str, Any] = {}
        _add_if(details, "path", config_path)
        _add_if(details, "option", option)

        super().__init__(message, details)

        self.config_path = config_path
        self.option = option
