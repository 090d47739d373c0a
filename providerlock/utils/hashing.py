"""
Digest helpers for provider packages.

Two digest families describe a provider release:

- ``h1:``: hash of a package's *unpacked* contents. Every file in the
  zip contributes a ``"<sha256 hex>  <name>\\n"`` line; the sorted lines
  are hashed once more and base64-encoded.
- ``zh:``: plain SHA-256 of a packaged zip, as listed in the release's
  ``SHA256SUMS`` document.
"""

from __future__ import annotations

import io
import base64
import hashlib
import zipfile
from typing import Dict

from providerlock.utils.logger import get_logger
from providerlock.constants import H1_PREFIX, KNOWN_ARCH, KNOWN_OS, ZH_PREFIX

logger = get_logger("hashing")

__all__ = ["hash_zip_v1", "zh_digest", "sha256_hex", "parse_shasums"]


def sha256_hex(data: bytes) -> str:
    """Return the lower-case hex SHA-256 of *data*."""
    return hashlib.sha256(data).hexdigest()


def zh_digest(hex_digest: str) -> str:
    """Return *hex_digest* as a ``zh:`` digest string."""
    return f"{ZH_PREFIX}{hex_digest.lower()}"


def hash_zip_v1(data: bytes) -> str:
    """Compute the ``h1:`` digest of a zip archive's contents.

    Args:
        data: Raw bytes of the zip archive.

    Returns:
        Digest string such as ``"h1:3323G20HW9PA9ONrL6CdQCdCFe6y94kXeOTprq+Zu+w="``.

    Raises:
        ValueError: The archive is not a valid zip, or an entry name
            contains a newline.

    Example::

        >>> hash_zip_v1(zip_bytes)
        'h1:...'
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ValueError(f"Invalid zip archive: {exc}") from exc

    with archive:
        names = sorted(archive.namelist())
        summary = hashlib.sha256()

        for name in names:
            if "\n" in name:
                raise ValueError(f"Zip entry name contains a newline: {name!r}")
            digest = sha256_hex(archive.read(name))
            summary.update(f"{digest}  {name}\n".encode("utf-8"))

    return H1_PREFIX + base64.b64encode(summary.digest()).decode("ascii")


def parse_shasums(document: str) -> Dict[str, str]:
    """Parse a ``SHA256SUMS`` document into ``zh:`` digests keyed by platform.

    Each line has the form ``<hex>  <name>_<version>_<os>_<arch>.zip``.
    Lines that are blank, malformed, not a zip, or whose platform suffix is
    not a recognized ``os_arch`` pair are skipped; release documents also
    list manifests and other non-package files.

    Args:
        document: Text content of the checksum document.

    Returns:
        Mapping of platform token to ``zh:`` digest, in document order.

    Example::

        >>> parse_shasums(
        ...     "5622a0fd...  terraform-provider-dummy_3.2.1_darwin_arm64.zip\\n"
        ... )
        {'darwin_arm64': 'zh:5622a0fd...'}
    """
    digests: Dict[str, str] = {}

    for line in document.splitlines():
        fields = line.split()
        if len(fields) != 2:
            continue

        hex_digest, filename = fields
        if not filename.endswith(".zip"):
            continue

        parts = filename[: -len(".zip")].split("_")
        if len(parts) < 3:
            logger.debug("Skipping unrecognized checksum entry: %s", filename)
            continue

        os_name, arch = parts[-2], parts[-1]
        if os_name not in KNOWN_OS or arch not in KNOWN_ARCH:
            logger.debug("Skipping checksum entry for unknown platform: %s", filename)
            continue

        digests[f"{os_name}_{arch}"] = zh_digest(hex_digest)

    return digests
