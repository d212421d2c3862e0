"""Precise unit tests for HTTPClient.

Tests focus on session management, URL building and error mapping.
"""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from simaland.api.core import TransportError
from simaland.api.utils.http import HTTPClient


def mock_session(status: int = 200, body: bytes = b"[]") -> MagicMock:
    """Session whose get() yields a response with ``status`` and ``body``."""
    response = MagicMock()
    response.status = status
    response.read = AsyncMock(return_value=body)

    session = MagicMock()
    session.closed = False
    session.get.return_value.__aenter__.return_value = response
    return session


class TestHTTPClientSessionManagement:
    """Test HTTPClient session management."""

    def test_init(self):
        client = HTTPClient(timeout=10.0, headers={"X-Test": "1"})
        assert client.timeout.total == 10.0
        assert client.headers == {"X-Test": "1"}
        assert client._session is None

    @pytest.mark.asyncio
    async def test_session_property_creates_session(self):
        client = HTTPClient()
        session = client.session
        assert isinstance(session, aiohttp.ClientSession)
        assert client._session is session
        await client.close()

    @pytest.mark.asyncio
    async def test_session_property_recreates_closed_session(self):
        client = HTTPClient()
        session1 = client.session
        await session1.close()

        session2 = client.session
        assert session1 is not session2
        assert not session2.closed
        await client.close()

    @pytest.mark.asyncio
    async def test_close_idempotent(self):
        client = HTTPClient()
        await client.close()
        await client.close()

    @pytest.mark.asyncio
    async def test_context_manager(self):
        async with HTTPClient() as client:
            assert client.session is not None

        assert client._session is None or client._session.closed


class TestHTTPClientFetch:
    """Test raw fetch and error mapping."""

    @pytest.mark.parametrize(
        "base_url,url,expected",
        [
            ("https://api.example.com/v3/", "item/", "https://api.example.com/v3/item/"),
            ("https://api.example.com/v3", "/item/", "https://api.example.com/v3/item/"),
            ("https://api.example.com", "https://other.example.com/x", "https://other.example.com/x"),
            (None, "https://api.example.com/item/", "https://api.example.com/item/"),
        ],
    )
    def test_build_url(self, base_url, url, expected):
        assert HTTPClient(base_url=base_url).build_url(url) == expected

    @pytest.mark.asyncio
    async def test_fetch_returns_raw_response(self):
        client = HTTPClient(base_url="https://api.example.com/v3/")
        client._session = mock_session(200, b'[{"id": 1}]')

        response = await client.fetch("item/", params={"p": "2"})

        assert response.status == 200
        assert response.body == b'[{"id": 1}]'
        client._session.get.assert_called_once_with(
            "https://api.example.com/v3/item/", params={"p": "2"}, headers=None
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [404, 500, 503, 999])
    async def test_fetch_does_not_raise_on_error_status(self, status):
        client = HTTPClient()
        client._session = mock_session(status, b"error")

        response = await client.fetch("https://api.example.com/item/")

        assert response.status == status

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            aiohttp.ClientConnectionError("connection reset"),
            aiohttp.ServerDisconnectedError(),
            asyncio.TimeoutError(),
        ],
    )
    async def test_fetch_maps_connection_failures(self, error):
        client = HTTPClient()
        client._session = mock_session()
        client._session.get.side_effect = error

        with pytest.raises(TransportError) as exc_info:
            await client.fetch("https://api.example.com/item/")

        assert exc_info.value.__cause__ is error
