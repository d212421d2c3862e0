"""Lane request data model."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

DEFAULT_CURSOR = 1


class LaneRequest(BaseModel):
    """Request descriptor bound to one pagination lane.

    The lane's position in the collection lives in ``query_params`` under
    ``cursor_key``. An absent cursor means page 1. All mutators return a new
    instance; a request is never changed in place.
    """

    entity: str = Field(..., min_length=1)
    query_params: dict[str, str] = Field(default_factory=dict)
    cursor_key: str | None = "p"

    model_config = ConfigDict(frozen=True)

    @field_validator("query_params", mode="before")
    @classmethod
    def stringify_params(cls, v: Any) -> dict[str, str]:
        """Coerce keys and values to strings, as they end up in a query string."""
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("query_params must be a mapping")
        return {str(key): str(value) for key, value in v.items()}

    @model_validator(mode="after")
    def validate_cursor(self) -> LaneRequest:
        """Cursor, when present, must be a positive integer."""
        if self.cursor_key is not None and self.cursor_key in self.query_params:
            raw = self.query_params[self.cursor_key]
            try:
                value = int(raw)
            except ValueError:
                raise ValueError(f"cursor {self.cursor_key!r} must be an integer, got {raw!r}") from None
            if value < 1:
                raise ValueError(f"cursor {self.cursor_key!r} must be positive, got {value}")
        return self

    @property
    def cursor(self) -> int:
        """Current page of this lane (1 when not yet assigned)."""
        if self.cursor_key is None or self.cursor_key not in self.query_params:
            return DEFAULT_CURSOR
        return int(self.query_params[self.cursor_key])

    @property
    def path(self) -> str:
        """Relative request path for the entity collection."""
        return f"{self.entity}/"

    def with_cursor(self, value: int) -> LaneRequest:
        """Return a copy pointing at page ``value``."""
        if self.cursor_key is None:
            raise ValueError("Cannot assign a cursor: cursor key is disabled")
        if value < 1:
            raise ValueError(f"cursor must be positive, got {value}")
        params = {**self.query_params, self.cursor_key: str(value)}
        return self.model_copy(update={"query_params": params})

    def with_offset(self, number: int) -> LaneRequest:
        """Shift the cursor by ``number`` lanes from its current value."""
        return self.with_cursor(self.cursor + number)

    def advance(self, stride: int) -> LaneRequest:
        """Return the request for this lane's next page."""
        return self.with_cursor(self.cursor + stride)
