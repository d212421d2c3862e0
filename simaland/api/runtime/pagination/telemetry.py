"""Structured logging for pagination operations.

This module provides telemetry hooks for the pagination engine, emitting
structured logs for lane planning, fetch rounds and retries.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_lane_plan(
    *,
    entity: str,
    total_lanes: int,
    first_cursor: int,
    stride: int,
) -> None:
    """Log creation of a traversal's initial lane set.

    Args:
        entity: Entity name of the collection
        total_lanes: Number of lanes planned
        first_cursor: Page requested by lane 0
        stride: Pages each lane advances per round
    """
    logger.debug(
        "lane_plan_created",
        extra={
            "entity": entity,
            "total_lanes": total_lanes,
            "first_cursor": first_cursor,
            "stride": stride,
        },
    )


def log_round_completed(
    *,
    entity: str,
    round_index: int,
    lanes_dispatched: int,
    records: int,
    lanes_exhausted: int,
    latency_ms: float | None = None,
) -> None:
    """Log completion of a fetch round.

    Args:
        entity: Entity name of the collection
        round_index: One-based number of the round within the traversal
        lanes_dispatched: Lanes requested in this round
        records: Records buffered by this round
        lanes_exhausted: Lanes removed in this round
        latency_ms: Round latency including retries (optional)
    """
    logger.debug(
        "round_completed",
        extra={
            "entity": entity,
            "round_index": round_index,
            "lanes_dispatched": lanes_dispatched,
            "records": records,
            "lanes_exhausted": lanes_exhausted,
            "latency_ms": latency_ms,
        },
    )


def log_lane_exhausted(*, lane: int, cursor: int, status: int) -> None:
    """Log removal of an exhausted lane."""
    logger.debug(
        "lane_exhausted",
        extra={"lane": lane, "cursor": cursor, "status": status},
    )


def log_transient_failure(error: Exception, code: int) -> None:
    """Log a failed attempt that may still be retried."""
    logger.warning(str(error), extra={"code": code})


def log_retry_wait(delay_seconds: float) -> None:
    """Log the wait before the next attempt."""
    logger.info(f"Waiting {delay_seconds:g}s before retry")


def log_attempt(attempt: int, max_attempts: int) -> None:
    """Log the start of a retry attempt."""
    logger.info(f"Attempt {attempt} of {max_attempts}")


def log_round_failed(error: Exception, code: int) -> None:
    """Log a fetch round that ran out of attempts."""
    logger.error(str(error), extra={"code": code})
