"""Unit tests for providerlock.utils.http."""

from __future__ import annotations

from typing import Callable, List
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from providerlock.utils.http import HTTPClient
from providerlock.exceptions import NetworkError, RegistryError


def _client(handler: Callable[[httpx.Request], httpx.Response], **kwargs) -> HTTPClient:
    return HTTPClient(transport=httpx.MockTransport(handler), **kwargs)


@pytest.fixture
def no_sleep():
    """Skip backoff delays."""
    with patch("providerlock.utils.http.asyncio.sleep", new=AsyncMock()) as sleep:
        yield sleep


@pytest.mark.unit
class TestHTTPClientInit:
    """Tests for HTTPClient initialization and configuration."""

    def test_default_values(self) -> None:
        client = HTTPClient()

        assert client.timeout == 30
        assert client.max_retries == 3
        assert client.rate_limit_delay == 0.0
        assert client.verify_ssl is True
        assert client.max_concurrency == 10
        assert client.user_agent.startswith("providerlock/")
        assert client._client is None

    def test_custom_values(self) -> None:
        client = HTTPClient(timeout=10, max_retries=5, user_agent="Custom/1.0")

        assert client.timeout == 10
        assert client.max_retries == 5
        assert client.user_agent == "Custom/1.0"


@pytest.mark.unit
class TestHTTPClientRequests:
    """Tests for request helpers and error mapping."""

    @pytest.mark.asyncio
    async def test_context_manager_closes_client(self) -> None:
        client = _client(lambda request: httpx.Response(200))

        async with client:
            assert client._client is not None

        assert client._client is None

    @pytest.mark.asyncio
    async def test_get_json_and_user_agent(self) -> None:
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"versions": ["3.2.1"]})

        async with _client(handler) as client:
            data = await client.get_json("https://registry.example.org/v1/x")

        assert data == {"versions": ["3.2.1"]}
        assert seen[0].headers["User-Agent"].startswith("providerlock/")

    @pytest.mark.asyncio
    async def test_get_json_accepts_arrays(self) -> None:
        async with _client(lambda r: httpx.Response(200, json=[1, 2])) as client:
            assert await client.get_json("https://example.org/list") == [1, 2]

    @pytest.mark.asyncio
    async def test_get_json_object_rejects_arrays(self) -> None:
        async with _client(lambda r: httpx.Response(200, json=[1, 2])) as client:
            with pytest.raises(NetworkError, match="Expected JSON object"):
                await client.get_json_object("https://example.org/list")

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        async with _client(lambda r: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(NetworkError, match="Invalid JSON"):
                await client.get_json("https://example.org/page")

    @pytest.mark.asyncio
    async def test_get_text_and_bytes(self) -> None:
        async with _client(lambda r: httpx.Response(200, content=b"abc")) as client:
            assert await client.get_text("https://example.org/a") == "abc"
            assert await client.get_bytes("https://example.org/b") == b"abc"

    @pytest.mark.asyncio
    async def test_not_found_raises_registry_error(self) -> None:
        async with _client(lambda r: httpx.Response(404)) as client:
            with pytest.raises(RegistryError) as exc_info:
                await client.get("https://example.org/missing")

        assert exc_info.value.status_code == 404

    @pytest.mark.asyncio
    async def test_client_error_is_not_retried(self, no_sleep: AsyncMock) -> None:
        calls: List[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(403, text="forbidden")

        async with _client(handler, max_retries=3) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.get("https://example.org/secret")

        assert exc_info.value.status_code == 403
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_server_error_is_retried(self, no_sleep: AsyncMock) -> None:
        calls: List[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503)

        async with _client(handler, max_retries=2) as client:
            with pytest.raises(NetworkError, match="after 3 attempts"):
                await client.get("https://example.org/flaky")

        assert len(calls) == 3
        assert no_sleep.await_count == 2

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failure(self, no_sleep: AsyncMock) -> None:
        responses = [httpx.Response(502), httpx.Response(200, json={"ok": True})]

        async with _client(lambda r: responses.pop(0), max_retries=2) as client:
            assert await client.get_json("https://example.org/flaky") == {"ok": True}

    @pytest.mark.asyncio
    async def test_rate_limited_honours_retry_after(self, no_sleep: AsyncMock) -> None:
        responses = [
            httpx.Response(429, headers={"Retry-After": "7"}),
            httpx.Response(200, json={}),
        ]

        async with _client(lambda r: responses.pop(0)) as client:
            await client.get("https://example.org/busy")

        no_sleep.assert_awaited_once_with(7)

    @pytest.mark.asyncio
    async def test_network_error_is_retried(self, no_sleep: AsyncMock) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler, max_retries=1) as client:
            with pytest.raises(NetworkError) as exc_info:
                await client.get("https://example.org/down")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
