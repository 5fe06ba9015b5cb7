"""Settings API schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import UtcDatetime, reject_null


class SettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    key: str
    value: str
    description: str | None
    category: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class SettingData(BaseModel):
    setting: SettingOut


class SettingUpdateRequest(BaseModel):
    """Numbers and booleans are stored in their string form."""

    value: str | int | float | bool | None = None
    description: str | None = Field(default=None, max_length=500)

    @field_validator("value", mode="before")
    @classmethod
    def _value_not_null(cls, v: Any) -> Any:
        return reject_null(v)


class SettingListParams(BaseModel):
    category: str | None = Field(default=None, max_length=64)
