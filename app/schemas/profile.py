"""Profile API schemas."""

from typing import Any

from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.common import reject_null


class ProfileUpdateRequest(BaseModel):
    email: EmailStr | None = None
    username: str | None = Field(default=None, min_length=3, max_length=64)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    avatar: str | None = None

    @field_validator("email", "first_name", "last_name", mode="before")
    @classmethod
    def _required_columns_not_null(cls, v: Any) -> Any:
        return reject_null(v)


class PasswordChangeRequest(BaseModel):
    """Strength rules are checked by the service so they report every failure."""

    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=1)
