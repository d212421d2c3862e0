"""Fetch round execution.

This module provides the RoundExecutor class that dispatches the requests
of every active lane at once and gathers their responses.
"""

from __future__ import annotations

from ...core.exceptions import ContractError
from ..rest.transport import BatchTransport
from .definitions import LaneResponse, LaneSet, RoundResult


class RoundExecutor:
    """Executes one fetch round over a lane set snapshot.

    The transport receives the whole snapshot as a single batch and only
    returns once every request has finished, so a round is a full barrier.
    HTTP error statuses are returned, not raised; only connection-level
    failures from the transport abort the round.
    """

    def __init__(self, transport: BatchTransport) -> None:
        self._transport = transport

    async def execute(self, lane_set: LaneSet) -> RoundResult:
        """Fetch the current page of every lane.

        Args:
            lane_set: Active lanes of the traversal (must not be empty)

        Returns:
            RoundResult with one LaneResponse per lane, in dispatch order

        Raises:
            ContractError: If the lane set is empty or the transport answers
                with a different number of responses than requests
            TransportError: If the transport fails
        """
        if lane_set.is_empty:
            raise ContractError("Cannot execute: lane set is empty")

        indices = lane_set.indices()
        requests = lane_set.requests()
        responses = list(await self._transport.batch_fetch(requests))

        if len(responses) != len(requests):
            raise ContractError(
                f"Transport returned {len(responses)} responses for {len(requests)} requests"
            )

        return RoundResult(
            tuple(
                LaneResponse(lane=lane, status=response.status, body=response.body)
                for lane, response in zip(indices, responses, strict=True)
            )
        )
