"""Pagination metadata definitions and policy structures.

This module defines the data structures shared by the lane planner, the
round executor, the response classifier and the retry controller.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from ...config import (
    DEFAULT_COUNT_LANES,
    DEFAULT_CURSOR_KEY,
    DEFAULT_DELAY_SECONDS,
    DEFAULT_MAX_ATTEMPTS,
)
from ...core.exceptions import ContractError
from ...models import LaneRequest


@dataclass(frozen=True)
class PaginationPolicy:
    """Lane and retry settings for one paginated collection.

    Attributes:
        count_lanes: Number of concurrent lanes (>= 1)
        cursor_key: Query parameter carrying the page number (None = single lane)
        max_attempts: Attempts per fetch round before giving up (>= 1)
        delay_seconds: Fixed wait between attempts (>= 0)
    """

    count_lanes: int = DEFAULT_COUNT_LANES
    cursor_key: str | None = DEFAULT_CURSOR_KEY
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay_seconds: float = DEFAULT_DELAY_SECONDS

    def __post_init__(self) -> None:
        """Validate policy configuration."""
        if self.count_lanes < 1:
            raise ValueError("count_lanes must be >= 1")
        if self.cursor_key is not None and not self.cursor_key:
            raise ValueError("cursor_key must be a non-empty string or None")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must be >= 0")

    @property
    def multi_lane(self) -> bool:
        """Whether requests are spread over several lanes."""
        return self.cursor_key is not None and self.count_lanes > 1


@dataclass(frozen=True)
class LaneSet:
    """Immutable snapshot of the active lanes of a traversal.

    Lanes are dispatched in ascending index order. A new snapshot is produced
    for every round; indices may only disappear between snapshots.
    """

    lanes: Mapping[int, LaneRequest] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = dict(sorted(self.lanes.items()))
        for index, request in ordered.items():
            if index < 0:
                raise ContractError(f"Lane index must be >= 0, got {index}")
            if not isinstance(request, LaneRequest):
                raise ContractError(
                    f"Lane {index}: request must be a LaneRequest, got {type(request).__name__}"
                )
        object.__setattr__(self, "lanes", ordered)

    def __len__(self) -> int:
        return len(self.lanes)

    def __iter__(self) -> Iterator[int]:
        return iter(self.lanes)

    def __getitem__(self, index: int) -> LaneRequest:
        return self.lanes[index]

    @property
    def is_empty(self) -> bool:
        return not self.lanes

    def indices(self) -> list[int]:
        return list(self.lanes)

    def requests(self) -> list[LaneRequest]:
        return list(self.lanes.values())

    def retain(self, updates: Mapping[int, LaneRequest]) -> LaneSet:
        """Build the next snapshot from the lanes that stay active.

        Args:
            updates: Surviving lane index -> its request for the next round

        Raises:
            ContractError: If ``updates`` names a lane that is not active
        """
        unknown = set(updates) - set(self.lanes)
        if unknown:
            raise ContractError(f"Cannot re-add lanes {sorted(unknown)} to a lane set")
        return LaneSet(dict(updates))


@dataclass(frozen=True)
class LaneResponse:
    """Response of one lane within a fetch round."""

    lane: int
    status: int
    body: bytes


@dataclass(frozen=True)
class RoundResult:
    """All lane responses of one fetch round, in dispatch order."""

    responses: tuple[LaneResponse, ...]

    def __iter__(self) -> Iterator[LaneResponse]:
        return iter(self.responses)

    def __len__(self) -> int:
        return len(self.responses)


@dataclass
class RoundOutcome:
    """Classified result of a fetch round.

    Attributes:
        records: Decoded records, lane dispatch order then body order
        lane_set: Lane set for the next round
        exhausted: Lanes removed in this round
    """

    records: list[Any]
    lane_set: LaneSet
    exhausted: tuple[int, ...] = ()
