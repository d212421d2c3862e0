"""Shared fakes for unit tests."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from simaland.api.models import LaneRequest, RawResponse


def json_response(records: Any, status: int = 200) -> RawResponse:
    """Build a response whose body is ``records`` encoded as JSON."""
    return RawResponse(status=status, body=json.dumps(records).encode())


NOT_FOUND = RawResponse(status=404, body=b'{"message": "Not found"}')


class ScriptedTransport:
    """Batch transport that serves pages from a script.

    Args:
        pages: Page number -> RawResponse, or a list of records (served as 200 JSON).
            Pages not in the script answer 404.
        script: One entry per batch call, consumed in order. An exception is
            raised for that batch; a dict overrides page responses for that
            batch only. Once the script runs out, ``pages`` is served.
    """

    def __init__(
        self,
        pages: dict[int, Any] | None = None,
        *,
        script: Sequence[Any] = (),
    ) -> None:
        self.pages = dict(pages or {})
        self.script = list(script)
        self.batches: list[list[LaneRequest]] = []

    @property
    def calls(self) -> int:
        return len(self.batches)

    @property
    def requested_pages(self) -> list[list[int]]:
        return [[request.cursor for request in batch] for batch in self.batches]

    async def batch_fetch(self, requests: Sequence[LaneRequest]) -> list[RawResponse]:
        self.batches.append(list(requests))

        overrides: dict[int, Any] = {}
        if self.script:
            step = self.script.pop(0)
            if isinstance(step, BaseException):
                raise step
            overrides = step

        return [self._respond(request.cursor, overrides) for request in requests]

    def _respond(self, page: int, overrides: dict[int, Any]) -> RawResponse:
        entry = overrides.get(page, self.pages.get(page, NOT_FOUND))
        if isinstance(entry, RawResponse):
            return entry
        return json_response(entry)
