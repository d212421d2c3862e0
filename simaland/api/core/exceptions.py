"""Custom exception hierarchy."""

from __future__ import annotations


class ApiError(Exception):
    """Base exception for all library errors."""

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.code = code


class TransportError(ApiError):
    """Connection-level failure talking to the API (timeout, DNS, reset).

    Transient: the retry controller repeats the whole round.
    """

    pass


class ResponseError(ApiError):
    """A lane answered with a status outside 2xx that is not 404.

    Transient. One such response invalidates the entire fetch round.
    """

    def __init__(self, message: str, status_code: int, lane: int | None = None) -> None:
        super().__init__(message, code=status_code)
        self.status_code = status_code
        self.lane = lane


class ContractError(ApiError):
    """Caller or collaborator broke an interface contract. Never retried."""

    pass


class FatalRoundError(ApiError):
    """A fetch round kept failing until its attempt budget ran out."""

    def __init__(self, message: str, attempts: int, last_error: ApiError) -> None:
        super().__init__(message, code=last_error.code)
        self.attempts = attempts
        self.last_error = last_error


class RetryAbortedError(ApiError):
    """The traversal was aborted while waiting between attempts."""

    def __init__(self, message: str, attempt: int) -> None:
        super().__init__(message)
        self.attempt = attempt
