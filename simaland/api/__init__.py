"""SimaLand API - lane-parallel, fault-tolerant iteration over paginated entities."""

from .clients import EntityCursor, EntityList
from .core import (
    ApiError,
    ContractError,
    Entity,
    FatalRoundError,
    NamedEntity,
    ResponseError,
    RetryAbortedError,
    TransportError,
)
from .models import LaneRequest, RawResponse
from .runtime.pagination import (
    LanePlanner,
    LaneSet,
    PaginationPolicy,
    ResponseClassifier,
    RetryController,
    RoundExecutor,
)
from .runtime.rest import BatchTransport, HTTPClient, RESTTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Clients
    "EntityList",
    "EntityCursor",
    # Entities
    "Entity",
    "NamedEntity",
    # Models
    "LaneRequest",
    "RawResponse",
    # Pagination
    "PaginationPolicy",
    "LaneSet",
    "LanePlanner",
    "RoundExecutor",
    "ResponseClassifier",
    "RetryController",
    # Transport
    "BatchTransport",
    "RESTTransport",
    "HTTPClient",
    # Exceptions
    "ApiError",
    "TransportError",
    "ResponseError",
    "ContractError",
    "FatalRoundError",
    "RetryAbortedError",
]
