"""REST transport for batched lane requests."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, Protocol

from ...config import BASE_URL, DEFAULT_HEADERS, DEFAULT_TIMEOUT
from ...models import LaneRequest, RawResponse
from ...utils.http import HTTPClient


class BatchTransport(Protocol):
    """Protocol for collaborators that fetch a batch of lane requests.

    Implementations return exactly one RawResponse per request, in request
    order, and raise TransportError when a request could not be answered.
    """

    async def batch_fetch(self, requests: Sequence[LaneRequest]) -> list[RawResponse]: ...


class RESTTransport:
    """Batch transport over HTTPClient.

    All requests of a batch are sent concurrently. The batch returns only
    after every request has finished; if any of them failed, the first
    failure in request order is raised.
    """

    def __init__(
        self,
        base_url: str = BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: dict[str, str] | None = None,
    ) -> None:
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            headers={**DEFAULT_HEADERS, **(headers or {})},
        )

    async def fetch(self, request: LaneRequest) -> RawResponse:
        return await self._http.fetch(request.path, params=dict(request.query_params))

    async def batch_fetch(self, requests: Sequence[LaneRequest]) -> list[RawResponse]:
        results: list[Any] = await asyncio.gather(
            *(self.fetch(request) for request in requests),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        return results

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> RESTTransport:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
