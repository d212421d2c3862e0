"""REST runtime abstractions."""

from ...utils.http import HTTPClient
from .transport import BatchTransport, RESTTransport

__all__ = [
    "HTTPClient",
    "BatchTransport",
    "RESTTransport",
]
