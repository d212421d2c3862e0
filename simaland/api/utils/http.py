"""HTTP client helper."""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from ..core.exceptions import TransportError
from ..models import RawResponse


class HTTPClient:
    """Async HTTP client wrapper.

    Returns raw status and body for every answered request. Only failures
    to get an answer at all (connection errors, timeouts) raise, as
    TransportError.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session: Optional[aiohttp.ClientSession] = None

    @property
    def session(self) -> aiohttp.ClientSession:
        """Get or create session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout, headers=self.headers)
        return self._session

    def build_url(self, url: str) -> str:
        """Join a relative path onto base_url."""
        if self.base_url and not url.startswith("http"):
            return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"
        return url

    async def fetch(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> RawResponse:
        """GET request returning the undecoded response."""
        url = self.build_url(url)
        try:
            async with self.session.get(url, params=params, headers=headers) as response:
                body = await response.read()
                return RawResponse(status=response.status, body=body)
        except asyncio.TimeoutError as e:
            raise TransportError(f"GET {url} timed out") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"GET {url} failed: {e}") from e

    async def close(self) -> None:
        """Close session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "HTTPClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
