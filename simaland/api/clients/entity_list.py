"""Lazy, lane-parallel iteration over a paginated entity collection.

Architecture:
    EntityList holds the configuration of a collection (entity, query
    parameters, pagination policy) and hands out EntityCursor objects, one
    per traversal. A cursor owns all traversal state: its lane set snapshot,
    its record buffer, its key and round counters. Nothing mutable is shared
    between traversals.

    Rounds are pulled on demand: the cursor fetches a new round only when
    its buffer is empty, so a consumer that stops iterating stops all I/O.

Example:
    >>> async with RESTTransport() as transport:
    ...     items = EntityList(transport, ITEM, query_params={"category_id": 42})
    ...     async for item in items:
    ...         print(item["sid"])
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import Awaitable, Callable, Iterable, Mapping
from time import perf_counter
from typing import Any

from ..core.entity import Entity, resolve_entity
from ..core.exceptions import ContractError, FatalRoundError
from ..models import LaneRequest
from ..runtime.pagination import (
    LanePlanner,
    LaneSet,
    PaginationPolicy,
    ResponseClassifier,
    RetryController,
    RoundExecutor,
    RoundOutcome,
)
from ..runtime.pagination.telemetry import log_round_completed
from ..runtime.rest.transport import BatchTransport

logger = logging.getLogger(__name__)


class EntityList:
    """Paginated collection of one API entity.

    Iterating with ``async for`` starts a new traversal from the configured
    initial offsets every time.
    """

    def __init__(
        self,
        transport: BatchTransport,
        entity: Entity | str,
        *,
        policy: PaginationPolicy | None = None,
        query_params: Mapping[str, Any] | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize entity list.

        Args:
            transport: Collaborator that fetches a batch of lane requests
            entity: Entity (or entity name) of the collection
            policy: Lane and retry settings (defaults to PaginationPolicy())
            query_params: Query parameters merged into every lane's request
            sleep: Awaitable used to wait between retry attempts
        """
        self._transport = transport
        self._entity = resolve_entity(entity)
        self._policy = policy or PaginationPolicy()
        self._query_params: dict[str, str] = {}
        self._seed: LaneSet | None = None
        self._sleep = sleep
        self._last_cursor: EntityCursor | None = None

        self._planner = LanePlanner(self._policy)
        self._executor = RoundExecutor(transport)
        self._classifier = ResponseClassifier(self._planner)

        if query_params:
            self.add_query_params(query_params)

    @property
    def entity(self) -> str:
        return self._entity

    @property
    def policy(self) -> PaginationPolicy:
        return self._policy

    @property
    def query_params(self) -> dict[str, str]:
        """Query parameters shared by every lane (copy)."""
        return dict(self._query_params)

    @query_params.setter
    def query_params(self, value: Mapping[str, Any]) -> None:
        self._query_params = {str(k): str(v) for k, v in value.items()}

    @property
    def round_count(self) -> int:
        """Rounds completed by the most recently started traversal."""
        if self._last_cursor is None:
            return 0
        return self._last_cursor.round_count

    def add_query_params(self, params: Mapping[str, Any]) -> EntityList:
        """Merge ``params`` into the shared query parameters."""
        self._query_params.update({str(k): str(v) for k, v in params.items()})
        return self

    def set_requests(self, requests: Iterable[Any]) -> None:
        """Seed traversals with explicit lane requests instead of planned ones.

        Lane ``i`` is the ``i``-th request. Pass an empty iterable to go back
        to planned lanes.

        Raises:
            ContractError: If any element is not a LaneRequest
        """
        lanes: dict[int, LaneRequest] = {}
        for index, request in enumerate(requests):
            if not isinstance(request, LaneRequest):
                raise ContractError(
                    f"Request must be a LaneRequest, got {type(request).__name__}"
                )
            lanes[index] = request
        self._seed = LaneSet(lanes) if lanes else None

    def initial_lane_set(self) -> LaneSet:
        """Lane set a new traversal starts from."""
        if self._seed is not None:
            return self._seed
        return self._planner.initial(self._entity, self._query_params)

    def cursor(self) -> EntityCursor:
        """Start a new, independent traversal."""
        self._last_cursor = EntityCursor(self)
        return self._last_cursor

    def __aiter__(self) -> EntityCursor:
        return self.cursor()

    async def fetch_round(
        self,
        lane_set: LaneSet,
        *,
        stop_event: asyncio.Event | None = None,
    ) -> RoundOutcome:
        """Fetch and classify one round, retrying it as a whole on failure.

        Args:
            lane_set: Active lanes to dispatch
            stop_event: Event that aborts a pending retry wait

        Returns:
            RoundOutcome with the round's records and the next lane set

        Raises:
            FatalRoundError: If the round kept failing transiently
            RetryAbortedError: If stop_event was set during a retry wait
        """
        retry = RetryController.from_policy(self._policy, sleep=self._sleep, stop_event=stop_event)

        async def attempt():
            result = await self._executor.execute(lane_set)
            self._classifier.check(result)
            return result

        result = await retry.run(attempt)
        return self._classifier.classify(lane_set, result)

    async def collect(self, limit: int | None = None) -> list[Any]:
        """Read the collection (or its first ``limit`` records) into a list."""
        records: list[Any] = []
        if limit is not None and limit <= 0:
            return records
        async for record in self:
            records.append(record)
            if limit is not None and len(records) >= limit:
                break
        return records


class EntityCursor:
    """Forward-only traversal of an EntityList.

    ``valid`` is driven by an explicit exhaustion flag, so records that are
    falsy (``0``, ``""``, ``{}``) are delivered like any other record.
    """

    def __init__(self, owner: EntityList) -> None:
        self._owner = owner
        self._lane_set = LaneSet()
        self._buffer: deque[Any] = deque()
        self._current: Any = None
        self._key = -1
        self._round_count = 0
        self._started = False
        self._exhausted = False
        self._stop_event = asyncio.Event()

    @property
    def current(self) -> Any:
        """Record the cursor points at (None once exhausted)."""
        return self._current

    @property
    def key(self) -> int:
        """Zero-based sequence number of the current record."""
        return self._key

    @property
    def valid(self) -> bool:
        return self._started and not self._exhausted

    @property
    def round_count(self) -> int:
        return self._round_count

    @property
    def active_lanes(self) -> int:
        return len(self._lane_set)

    def abort(self) -> None:
        """Interrupt a pending retry wait; the fetch raises RetryAbortedError."""
        self._stop_event.set()

    async def rewind(self) -> None:
        """Reset to the initial lanes and load the first record."""
        self._buffer.clear()
        self._current = None
        self._key = -1
        self._round_count = 0
        self._exhausted = False
        self._stop_event.clear()
        self._lane_set = self._owner.initial_lane_set()
        self._started = True
        await self.advance()

    async def advance(self) -> None:
        """Move to the next record, fetching a round if the buffer is empty."""
        if not self._started:
            await self.rewind()
            return

        while not self._buffer and not self._lane_set.is_empty:
            await self._fill()

        if self._buffer:
            self._current = self._buffer.popleft()
            self._key += 1
        else:
            self._current = None
            self._exhausted = True

    async def _fill(self) -> None:
        lane_set = self._lane_set
        started = perf_counter()
        try:
            outcome = await self._owner.fetch_round(lane_set, stop_event=self._stop_event)
        except FatalRoundError:
            self._round_count += 1
            self._end_traversal()
            raise
        except BaseException:
            # Aborted or cancelled rounds end the traversal without counting
            self._end_traversal()
            raise

        self._round_count += 1
        self._lane_set = outcome.lane_set
        self._buffer.extend(outcome.records)

        log_round_completed(
            entity=self._owner.entity,
            round_index=self._round_count,
            lanes_dispatched=len(lane_set),
            records=len(outcome.records),
            lanes_exhausted=len(outcome.exhausted),
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        if self._lane_set.is_empty:
            logger.info(
                f"{self._owner.entity}: all lanes exhausted after {self._round_count} rounds"
            )

    def _end_traversal(self) -> None:
        self._lane_set = LaneSet()
        self._exhausted = True

    def __aiter__(self) -> EntityCursor:
        return self

    async def __anext__(self) -> Any:
        if not self._started:
            await self.rewind()
        else:
            await self.advance()
        if not self.valid:
            raise StopAsyncIteration
        return self._current
