"""Unit tests for providerlock.models.platform."""

from __future__ import annotations

import pytest

from providerlock.models.platform import Platform, parse_platform
from providerlock.exceptions import InvalidPlatformError


@pytest.mark.unit
class TestParsePlatform:
    """Tests for parse_platform."""

    @pytest.mark.parametrize(
        "token, os_name, arch",
        [
            ("darwin_arm64", "darwin", "arm64"),
            ("linux_amd64", "linux", "amd64"),
            ("windows_386", "windows", "386"),
            ("freebsd_arm", "freebsd", "arm"),
        ],
    )
    def test_valid_tokens(self, token: str, os_name: str, arch: str) -> None:
        platform = parse_platform(token)

        assert platform == Platform(os=os_name, arch=arch)
        assert str(platform) == token

    @pytest.mark.parametrize(
        "token",
        [
            "foo",
            "",
            "_",
            "linux_",
            "_amd64",
            "linux_amd64_v2",
            "linux-amd64",
            "beos_amd64",
            "linux_sparc",
            "Linux_amd64",
        ],
    )
    def test_invalid_tokens(self, token: str) -> None:
        with pytest.raises(InvalidPlatformError) as exc_info:
            parse_platform(token)

        assert exc_info.value.platform == token

    def test_error_names_the_unknown_part(self) -> None:
        with pytest.raises(InvalidPlatformError, match="architecture 'sparc'"):
            parse_platform("linux_sparc")
