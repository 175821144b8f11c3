from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Envelope for every 2xx response."""

    status: Literal["success"] = "success"
    message: str
    data: T


class ErrorResponse(BaseModel):
    """Envelope for every error response."""

    status: Literal["error"] = "error"
    error: str
