"""User API schemas."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.schemas.common import UtcDatetime, reject_null


class RoleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str


class UserOut(BaseModel):
    """User response (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str | None
    first_name: str
    last_name: str
    avatar: str | None
    is_active: bool
    is_email_verified: bool
    last_login_at: UtcDatetime | None
    password_changed_at: UtcDatetime | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
    roles: list[RoleOut]
    permissions: list[str]


class UserData(BaseModel):
    user: UserOut


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int
    hasNext: bool
    hasPrev: bool


class UserListResponse(BaseModel):
    """GET /api/users: envelope plus pagination."""

    success: bool = True
    data: list[UserOut]
    pagination: Pagination


class UserStats(BaseModel):
    total: int
    active: int
    inactive: int
    verified: int
    unverified: int


class UserCreateRequest(BaseModel):
    email: EmailStr
    username: str | None = Field(default=None, min_length=3, max_length=64)
    password: str = Field(..., min_length=8)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    is_active: bool = True
    role_ids: list[str] = Field(default_factory=list)


class UserUpdateRequest(BaseModel):
    """Partial update; role_ids replaces all assignments when present."""

    email: EmailStr | None = None
    username: str | None = Field(default=None, min_length=3, max_length=64)
    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    avatar: str | None = None
    is_active: bool | None = None
    role_ids: list[str] | None = None

    @field_validator("email", "first_name", "last_name", "is_active", mode="before")
    @classmethod
    def _required_columns_not_null(cls, v: Any) -> Any:
        """Omit a field to leave it unchanged; only username and avatar may be cleared."""
        return reject_null(v)


class UserListParams(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    search: str | None = None
    sort_by: Literal[
        "first_name", "last_name", "email", "username", "created_at", "updated_at"
    ] = "created_at"
    sort_order: Literal["asc", "desc"] = "desc"
