"""Lane-partitioned pagination layer.

This module provides the engine that walks a paginated collection over
several concurrent lanes and retries failed rounds.

Architecture:
    The pagination layer consists of:
    - definitions.py: Policy and snapshot structures (PaginationPolicy, LaneSet, RoundResult)
    - planners.py: Initial lane partitioning and lane advancement
    - executors.py: Fan-out/fan-in execution of one fetch round
    - classifier.py: Per-lane response classification (data/exhausted/error)
    - retry.py: Bounded fixed-delay retry of whole rounds
    - telemetry.py: Structured logging

Usage:
    EntityList wires these parts together and exposes the records as an
    async iterator. The parts can also be driven directly, one round at a time.
"""

from __future__ import annotations

from .classifier import ResponseClassifier
from .definitions import (
    LaneResponse,
    LaneSet,
    PaginationPolicy,
    RoundOutcome,
    RoundResult,
)
from .executors import RoundExecutor
from .planners import LanePlanner
from .retry import TRANSIENT_ERRORS, RetryController

__all__ = [
    "PaginationPolicy",
    "LaneSet",
    "LaneResponse",
    "RoundResult",
    "RoundOutcome",
    "LanePlanner",
    "RoundExecutor",
    "ResponseClassifier",
    "RetryController",
    "TRANSIENT_ERRORS",
]
