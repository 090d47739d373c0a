"""Unit tests for providerlock.core.builder."""

from __future__ import annotations

from typing import Optional, Type

import pytest

from conftest import ADDRESS, H1_HASHES, VERSION, ZH_HASHES, make_response
from providerlock.models import DownloadRequest, ProviderVersion
from providerlock.core.builder import (
    build_download_request,
    build_provider_version,
    merge_provider_versions,
)
from providerlock.exceptions import (
    DigestSetMismatchError,
    DuplicatePlatformError,
    InvalidAddressError,
    InvalidPlatformError,
    InvalidVersionError,
    MissingDigestError,
    ProviderLockError,
)


# ============================================================================
# Test: build_download_request
# ============================================================================


@pytest.mark.unit
class TestBuildDownloadRequest:
    """Tests for build_download_request."""

    @pytest.mark.parametrize(
        "address, version, platform, want, error",
        [
            (
                "minamijoyo/dummy",
                "3.2.1",
                "darwin_arm64",
                DownloadRequest("minamijoyo", "dummy", "3.2.1", "darwin", "arm64"),
                None,
            ),
            (
                "registry.terraform.io/minamijoyo/dummy",
                "3.2.1",
                "darwin_arm64",
                DownloadRequest("minamijoyo", "dummy", "3.2.1", "darwin", "arm64"),
                None,
            ),
            ("null", "3.2.1", "darwin_arm64", None, InvalidAddressError),
            ("-/null", "3.2.1", "darwin_arm64", None, InvalidAddressError),
            ("", "3.2.1", "darwin_arm64", None, InvalidAddressError),
            ("minamijoyo/dummy", "3.2.1", "foo", None, InvalidPlatformError),
            ("minamijoyo/dummy", "", "darwin_arm64", None, InvalidVersionError),
            ("minamijoyo/dummy", "   ", "darwin_arm64", None, InvalidVersionError),
        ],
        ids=[
            "simple",
            "fully-qualified-address",
            "unknown-namespace",
            "legacy-namespace",
            "zero-namespace",
            "invalid-platform",
            "empty-version",
            "blank-version",
        ],
    )
    def test_cases(
        self,
        address: str,
        version: str,
        platform: str,
        want: Optional[DownloadRequest],
        error: Optional[Type[ProviderLockError]],
    ) -> None:
        if error is not None:
            with pytest.raises(error):
                build_download_request(address, version, platform)
            return

        assert build_download_request(address, version, platform) == want

    def test_address_error_is_propagated_unchanged(self) -> None:
        """Parser errors keep their own type and details."""
        with pytest.raises(InvalidAddressError) as exc_info:
            build_download_request("a/b/c/d", VERSION, "linux_amd64")

        assert exc_info.value.address == "a/b/c/d"

    def test_request_exposes_platform_token(self) -> None:
        request = build_download_request(ADDRESS, VERSION, "linux_arm64")
        assert request.platform == "linux_arm64"


# ============================================================================
# Test: build_provider_version
# ============================================================================


@pytest.mark.unit
class TestBuildProviderVersion:
    """Tests for build_provider_version."""

    def test_simple(self) -> None:
        got = build_provider_version(
            ADDRESS, VERSION, "darwin_arm64", make_response("darwin_arm64")
        )

        assert got == ProviderVersion(
            address=ADDRESS,
            version=VERSION,
            platforms=["darwin_arm64"],
            h1_hashes={"darwin_arm64": H1_HASHES["darwin_arm64"]},
            zh_hashes=ZH_HASHES,
        )

    def test_shared_digests_copied_verbatim(self) -> None:
        got = build_provider_version(
            ADDRESS, VERSION, "darwin_arm64", make_response("darwin_arm64")
        )

        assert dict(got.zh_hashes) == ZH_HASHES
        assert got.platforms == ("darwin_arm64",)

    @pytest.mark.parametrize("h1", ["", "zh:abc", "not-a-digest"])
    def test_missing_h1_digest(self, h1: str) -> None:
        with pytest.raises(MissingDigestError) as exc_info:
            build_provider_version(
                ADDRESS, VERSION, "darwin_arm64", make_response("darwin_arm64", h1=h1)
            )

        assert exc_info.value.platform == "darwin_arm64"

    def test_platform_missing_from_shared_digests(self) -> None:
        shared = {k: v for k, v in ZH_HASHES.items() if k != "linux_amd64"}

        with pytest.raises(MissingDigestError):
            build_provider_version(
                ADDRESS,
                VERSION,
                "linux_amd64",
                make_response("linux_amd64", shared=shared),
            )


# ============================================================================
# Test: merge_provider_versions
# ============================================================================


def _single(platform: str, **kwargs) -> ProviderVersion:
    return build_provider_version(
        ADDRESS, VERSION, platform, make_response(platform, **kwargs)
    )


@pytest.mark.unit
class TestMergeProviderVersions:
    """Tests for the fold step that aggregates single-platform records."""

    def test_first_record_seeds_aggregate(self) -> None:
        record = _single("darwin_arm64")
        assert merge_provider_versions(None, record) is record

    def test_records_fold_in_order(self) -> None:
        acc = None
        for platform in ["linux_amd64", "darwin_arm64", "darwin_amd64"]:
            acc = merge_provider_versions(acc, _single(platform))

        assert acc is not None
        assert acc.platforms == ("linux_amd64", "darwin_arm64", "darwin_amd64")
        assert dict(acc.h1_hashes) == H1_HASHES
        assert dict(acc.zh_hashes) == ZH_HASHES

    def test_inputs_are_not_modified(self) -> None:
        first = _single("linux_amd64")
        second = _single("darwin_arm64")

        merged = merge_provider_versions(first, second)

        assert first.platforms == ("linux_amd64",)
        assert second.platforms == ("darwin_arm64",)
        assert merged.platforms == ("linux_amd64", "darwin_arm64")

    def test_duplicate_platform(self) -> None:
        first = _single("linux_amd64")

        with pytest.raises(DuplicatePlatformError):
            merge_provider_versions(first, _single("linux_amd64"))

    def test_shared_digest_set_mismatch(self) -> None:
        shared = dict(ZH_HASHES)
        del shared["windows_amd64"]

        with pytest.raises(DigestSetMismatchError):
            merge_provider_versions(
                _single("linux_amd64"), _single("darwin_arm64", shared=shared)
            )

    def test_different_versions_cannot_merge(self) -> None:
        other = build_provider_version(
            ADDRESS, "3.2.0", "darwin_arm64", make_response("darwin_arm64")
        )

        with pytest.raises(ValueError):
            merge_provider_versions(_single("linux_amd64"), other)
