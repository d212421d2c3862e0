"""Data models for API requests and responses.

Architecture:
    Pydantic v2 models, all frozen. A LaneRequest is replaced rather than
    mutated whenever a lane moves to its next page, so a round's snapshot of
    requests can be dispatched concurrently without aliasing.

Records themselves are not modelled: the pagination engine passes the
decoded JSON of each collection element through untouched.
"""

from .lane_request import DEFAULT_CURSOR, LaneRequest
from .raw_response import RawResponse

__all__ = [
    "DEFAULT_CURSOR",
    "LaneRequest",
    "RawResponse",
]
