"""Provider package downloaders.

A downloader turns a :class:`DownloadRequest` into a
:class:`DownloadResponse`. The index depends only on the
:class:`ProviderDownloader` protocol, so tests and alternative registries
can supply their own implementation.

:class:`RegistryDownloader` talks to a registry that implements the
provider registry protocol::

    GET {registry}/v1/providers/{namespace}/{type}/{version}/download/{os}/{arch}

    {
      "filename": "terraform-provider-null_3.2.1_linux_amd64.zip",
      "download_url": "https://.../terraform-provider-null_3.2.1_linux_amd64.zip",
      "shasums_url": "https://.../terraform-provider-null_3.2.1_SHA256SUMS",
      "shasum": "c5f0a44e3a37...",
      ...
    }

The ``SHA256SUMS`` document supplies the shared ``zh:`` digest set; the
package itself is downloaded, checked against ``shasum``, and hashed into
its ``h1:`` digest. Signatures are not verified.
"""

from __future__ import annotations

import hmac
import asyncio
from typing import Any, Dict, Protocol

from providerlock.utils.http import HTTPClient
from providerlock.utils.logger import get_logger
from providerlock.models import DownloadRequest, DownloadResponse
from providerlock.exceptions import ChecksumMismatchError, RegistryError
from providerlock.utils.hashing import hash_zip_v1, parse_shasums, sha256_hex
from providerlock.constants import DEFAULT_REGISTRY_URL, PROVIDER_DOWNLOAD_PATH

logger = get_logger("downloader")

__all__ = ["ProviderDownloader", "RegistryDownloader"]


class ProviderDownloader(Protocol):
    """Fetches the digest data for one (version, platform) pair."""

    async def download(self, request: DownloadRequest) -> DownloadResponse:
        ...


class RegistryDownloader:
    """Downloader backed by a provider registry.

    Args:
        http_client: A pre-configured :class:`HTTPClient` (owns retries,
            timeouts, and the connection pool).
        registry_url: Base URL of the registry API.

    Example::

        async with HTTPClient() as client:
            downloader = RegistryDownloader(client)
            response = await downloader.download(
                build_download_request("hashicorp/null", "3.2.1", "linux_amd64")
            )
            print(response.h1_digest)
    """

    def __init__(
        self,
        http_client: HTTPClient,
        registry_url: str = DEFAULT_REGISTRY_URL,
    ) -> None:
        self.http_client = http_client
        self.registry_url = registry_url.rstrip("/")

    async def download(self, request: DownloadRequest) -> DownloadResponse:
        """Fetch metadata, checksums, and the package for *request*.

        Raises:
            RegistryError: The registry returned unusable metadata.
            ChecksumMismatchError: The package does not match its shasum.
            NetworkError: Transport failure after the HTTP client's retries.
        """
        provider = f"{request.namespace}/{request.type}"
        metadata = await self._fetch_metadata(request)

        download_url = _require(metadata, "download_url", provider)
        shasums_url = _require(metadata, "shasums_url", provider)
        filename = metadata.get("filename") or download_url.rsplit("/", 1)[-1]
        shasum = metadata.get("shasum")

        logger.debug("Downloading %s %s for %s", provider, request.version, request.platform)

        shasums_document, package = await asyncio.gather(
            self.http_client.get_text(shasums_url),
            self.http_client.get_bytes(download_url),
        )

        actual = sha256_hex(package)
        if shasum and not hmac.compare_digest(actual, shasum.lower()):
            raise ChecksumMismatchError(
                f"Checksum mismatch for {filename}: expected {shasum}, got {actual}",
                provider=provider,
                url=download_url,
            )

        try:
            h1_digest = hash_zip_v1(package)
        except ValueError as exc:
            raise RegistryError(
                f"Downloaded package {filename} is not a valid zip archive",
                provider=provider,
                url=download_url,
            ) from exc

        return DownloadResponse(
            h1_digest=h1_digest,
            shared_digests=parse_shasums(shasums_document),
            filename=filename,
            shasum=shasum,
        )

    async def _fetch_metadata(self, request: DownloadRequest) -> Dict[str, Any]:
        """Hit the registry download endpoint and return its JSON body."""
        url = self.registry_url + PROVIDER_DOWNLOAD_PATH.format(
            namespace=request.namespace,
            type=request.type,
            version=request.version,
            os=request.os,
            arch=request.arch,
        )
        return await self.http_client.get_json_object(url)


def _require(metadata: Dict[str, Any], key: str, provider: str) -> str:
    """Return ``metadata[key]`` or raise :class:`RegistryError` if absent."""
    value = metadata.get(key)
    if not value or not isinstance(value, str):
        raise RegistryError(
            f"Registry response is missing '{key}'",
            provider=provider,
        )
    return value
