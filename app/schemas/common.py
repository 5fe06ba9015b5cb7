"""Response envelope shared by all JSON endpoints."""

from datetime import datetime
from typing import Annotated, Any, Generic, TypeVar

from pydantic import AfterValidator, BaseModel, Field

from app.shared.utils.datetime import ensure_utc

DataT = TypeVar("DataT")

UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


def reject_null(value: Any) -> Any:
    """Field validator body for optional-in-request, NOT NULL-in-storage fields."""
    if value is None:
        raise ValueError("may not be null")
    return value


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope: {success, message, data}."""

    success: bool = True
    message: str | None = None
    data: DataT | None = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorBody(BaseModel):
    code: str
    statusCode: int
    timestamp: str
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Error envelope returned by the exception handlers."""

    success: bool = False
    message: str
    error: ErrorBody
