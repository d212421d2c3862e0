"""Raw HTTP response model."""

from pydantic import BaseModel, ConfigDict, Field


class RawResponse(BaseModel):
    """Undecoded response of a single lane request.

    Any non-negative status is accepted as the server sent it; deciding what
    an unusual status means is left to the classifier.
    """

    status: int = Field(..., ge=0)
    body: bytes = b""

    model_config = ConfigDict(frozen=True)

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300
