"""Role and permission API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import UtcDatetime, reject_null


class PermissionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None


class RoleDetailOut(BaseModel):
    """Role with permissions and holder count. System roles are the seeded ones."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    display_name: str
    description: str | None
    is_active: bool
    is_system: bool
    user_count: int
    permissions: list[PermissionOut]
    created_at: UtcDatetime
    updated_at: UtcDatetime


class RoleData(BaseModel):
    role: RoleDetailOut


class RoleCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    display_name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    is_active: bool = True
    permission_ids: list[str] = Field(default_factory=list)


class RoleUpdateRequest(BaseModel):
    """Partial update; permission_ids replaces the permission set when present."""

    name: str | None = Field(
        default=None, min_length=2, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$"
    )
    display_name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)
    is_active: bool | None = None
    permission_ids: list[str] | None = None

    @field_validator("name", "display_name", "is_active", "permission_ids", mode="before")
    @classmethod
    def _required_columns_not_null(cls, v: Any) -> Any:
        return reject_null(v)


class RoleListParams(BaseModel):
    search: str | None = Field(default=None, max_length=100)
