"""Lane planning logic.

This module provides the LanePlanner class that partitions the page space of
a collection across the configured number of lanes.
"""

from __future__ import annotations

from collections.abc import Mapping

from ...models import LaneRequest
from .definitions import LaneSet, PaginationPolicy
from .telemetry import log_lane_plan


class LanePlanner:
    """Plans the initial lanes of a traversal and how they advance.

    Lane ``i`` starts ``i`` pages after the configured start page and moves
    ``count_lanes`` pages per round, so with the default start the lanes
    request ``{i+1, i+1+N, i+1+2N, ...}``: every page exactly once.
    """

    def __init__(self, policy: PaginationPolicy) -> None:
        self._policy = policy

    @property
    def stride(self) -> int:
        """Pages a lane advances per round."""
        return self._policy.count_lanes if self._policy.multi_lane else 1

    @property
    def can_advance(self) -> bool:
        return self._policy.cursor_key is not None

    def initial(self, entity: str, query_params: Mapping[str, str] | None = None) -> LaneSet:
        """Build the lane set a new traversal starts from.

        Args:
            entity: Entity name of the collection
            query_params: Query parameters shared by every lane

        Returns:
            LaneSet with ``count_lanes`` lanes, or one lane in single-lane mode
        """
        base = LaneRequest(
            entity=entity,
            query_params=dict(query_params or {}),
            cursor_key=self._policy.cursor_key,
        )

        if not self._policy.multi_lane:
            lanes = {0: base}
        else:
            lanes = {i: base.with_offset(i) for i in range(self._policy.count_lanes)}

        log_lane_plan(
            entity=entity,
            total_lanes=len(lanes),
            first_cursor=base.cursor,
            stride=self.stride,
        )
        return LaneSet(lanes)

    def advance(self, request: LaneRequest) -> LaneRequest | None:
        """Request for the lane's next round, or None if it cannot move on."""
        if not self.can_advance or request.cursor_key is None:
            return None
        return request.advance(self.stride)
