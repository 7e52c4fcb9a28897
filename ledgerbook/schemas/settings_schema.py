from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional


def _setting_key(v):
    return v.strip().upper() if isinstance(v, str) else v


class SettingCreate(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=500)

    @field_validator("key", mode="before")
    def upper_key(cls, v):
        return _setting_key(v)

    @field_validator("value", mode="before")
    def strip_value(cls, v):
        return v.strip() if isinstance(v, str) else v


class SettingPatch(BaseModel):
    key: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=500)

    @field_validator("key", mode="before")
    def upper_key(cls, v):
        return _setting_key(v)

    @field_validator("value", mode="before")
    def strip_value(cls, v):
        return v.strip() if isinstance(v, str) else v


class SettingOut(BaseModel):
    key: str
    value: str
    description: Optional[str] = None
    updated_on: Optional[datetime] = None

    class Config:
        from_attributes = True
