"""Shared fixtures for the providerlock test suite."""

from __future__ import annotations

import asyncio
from typing import Dict, Iterator, List, Mapping, Optional

import pytest

from providerlock.models import DownloadRequest, DownloadResponse
from providerlock.utils.logger import disable_logging

ADDRESS = "minamijoyo/dummy"
VERSION = "3.2.1"
PLATFORMS = ["darwin_arm64", "darwin_amd64", "linux_amd64"]

H1_HASHES: Dict[str, str] = {
    "darwin_arm64": "h1:3323G20HW9PA9ONrL6CdQCdCFe6y94kXeOTprq+Zu+w=",
    "darwin_amd64": "h1:63My0EuWIYHWVwWOxmxWwgrfx+58Tz+nTduelaCCAfs=",
    "linux_amd64": "h1:2zotrPRAjGZZMkjJGBGLnIbG+sqhQN30sbwqSDECQFQ=",
}

# Published for windows_amd64 too, although the tests never request it
ZH_HASHES: Dict[str, str] = {
    "darwin_arm64": "zh:5622a0fd03420ed1fa83a1a6e90b65fbe34bc74c251b3b47048f14217e93b086",
    "darwin_amd64": "zh:fc5bbdd0a1bd6715b9afddf3aba6acc494425d77015c19579b9a9fa950e532b2",
    "linux_amd64": "zh:c5f0a44e3a3795cb3ee0abb0076097c738294c241f74c145dfb50f2b9fd71fd2",
    "windows_amd64": "zh:8b75ff41191a7fe6c5d9129ed19a01eacde5a3797b48b738eefa21f5330c081e",
}


def make_response(
    platform: str,
    *,
    h1: Optional[str] = None,
    shared: Optional[Mapping[str, str]] = None,
) -> DownloadResponse:
    """Build the response a registry would return for *platform*."""
    return DownloadResponse(
        h1_digest=H1_HASHES[platform] if h1 is None else h1,
        shared_digests=ZH_HASHES if shared is None else shared,
        filename=f"terraform-provider-dummy_{VERSION}_{platform}.zip",
        shasum=ZH_HASHES[platform][len("zh:"):],
    )


class FakeDownloader:
    """In-memory downloader that records every request it receives.

    Args:
        responses: Platform → response. Defaults to :data:`H1_HASHES` /
            :data:`ZH_HASHES` based responses for every known platform.
        errors: Platform → exception raised instead of responding.
        gate: Optional event every download waits on before answering.
    """

    def __init__(
        self,
        responses: Optional[Mapping[str, DownloadResponse]] = None,
        errors: Optional[Mapping[str, Exception]] = None,
        gate: Optional[asyncio.Event] = None,
    ) -> None:
        self.responses = dict(
            responses or {platform: make_response(platform) for platform in H1_HASHES}
        )
        self.errors = dict(errors or {})
        self.gate = gate
        self.requests: List[DownloadRequest] = []

    @property
    def called(self) -> int:
        return len(self.requests)

    async def download(self, request: DownloadRequest) -> DownloadResponse:
        self.requests.append(request)
        if self.gate is not None:
            await self.gate.wait()
        error = self.errors.get(request.platform)
        if error is not None:
            raise error
        return self.responses[request.platform]


@pytest.fixture
def downloader() -> FakeDownloader:
    """A downloader that succeeds for every known platform."""
    return FakeDownloader()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CI / colour / token variables from leaking into tests."""
    for name in ("NO_COLOR", "CI", "PROVIDERLOCK_CONFIG", "GITHUB_TOKEN", "GITLAB_TOKEN"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop handlers bound to streams that CliRunner closes."""
    yield
    disable_logging()
