"""Response classification for fetch rounds.

Each lane response of a round falls into one of three classes:

- data: status 200 with a non-empty JSON array body. The records are
  buffered and the lane moves to its next page.
- exhausted: status 404, any other 2xx, or a body that is empty, not JSON
  or not an array. The lane is dropped and contributes nothing.
- error: any status outside 2xx except 404. The whole round is rejected.
"""

from __future__ import annotations

import json
from typing import Any

from ...core.exceptions import ResponseError
from ...models import LaneRequest
from .definitions import LaneResponse, LaneSet, RoundOutcome, RoundResult
from .planners import LanePlanner
from .telemetry import log_lane_exhausted

NOT_FOUND = 404


class ResponseClassifier:
    """Turns a round's responses into records and the next lane set."""

    def __init__(self, planner: LanePlanner) -> None:
        self._planner = planner

    def check(self, result: RoundResult) -> None:
        """Reject the round if any lane hit a hard error status.

        Raises:
            ResponseError: For the first lane (in dispatch order) with a
                status outside 2xx other than 404
        """
        for response in result:
            if is_hard_error(response.status):
                raise ResponseError(
                    f"Lane {response.lane} responded with HTTP {response.status}",
                    status_code=response.status,
                    lane=response.lane,
                )

    def classify(self, lane_set: LaneSet, result: RoundResult) -> RoundOutcome:
        """Collect records and compute the lane set of the next round.

        Args:
            lane_set: Lane set the round was dispatched from
            result: Responses of the round

        Returns:
            RoundOutcome with buffered records and surviving lanes
        """
        self.check(result)

        records: list[Any] = []
        survivors: dict[int, LaneRequest] = {}
        exhausted: list[int] = []

        for response in result:
            request = lane_set[response.lane]
            body = decode_records(response)
            if body is None:
                log_lane_exhausted(lane=response.lane, cursor=request.cursor, status=response.status)
                exhausted.append(response.lane)
                continue

            records.extend(body)
            next_request = self._planner.advance(request)
            if next_request is None:
                # A lane without a cursor has nowhere to go after its only page
                exhausted.append(response.lane)
                continue
            survivors[response.lane] = next_request

        return RoundOutcome(
            records=records,
            lane_set=lane_set.retain(survivors),
            exhausted=tuple(exhausted),
        )


def is_hard_error(status: int) -> bool:
    return not (200 <= status < 300) and status != NOT_FOUND


def decode_records(response: LaneResponse) -> list[Any] | None:
    """Decode a lane's body into records, or None if the lane is exhausted."""
    if response.status != 200 or not response.body:
        return None
    try:
        body = json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(body, list) or not body:
        return None
    return body
