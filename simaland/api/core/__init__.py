"""Core components."""

from .entity import Entity, NamedEntity, resolve_entity
from .exceptions import (
    ApiError,
    ContractError,
    FatalRoundError,
    ResponseError,
    RetryAbortedError,
    TransportError,
)

__all__ = [
    "Entity",
    "NamedEntity",
    "resolve_entity",
    "ApiError",
    "TransportError",
    "ResponseError",
    "ContractError",
    "FatalRoundError",
    "RetryAbortedError",
]
