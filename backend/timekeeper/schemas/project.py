import re

from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional, List


HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}){1,2}$")


def _clean_name(value: Optional[str]) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError("Project name is required")
    return cleaned


def _clean_color(value: Optional[str]) -> str:
    if value is None or not HEX_COLOR.match(value):
        raise ValueError("Color must be a hex value like #F4D03F")
    return value


# ---------- CREATE ----------
class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        return _clean_name(value)

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Optional[str]):
        if value is None or value == "":
            return None
        return _clean_color(value)


# ---------- UPDATE ----------
class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]):
        return _clean_name(value)

    @field_validator("color")
    @classmethod
    def validate_color(cls, value: Optional[str]):
        return _clean_color(value)

    @field_validator("is_active")
    @classmethod
    def validate_is_active(cls, value: Optional[bool]):
        if value is None:
            raise ValueError("is_active cannot be null")
        return value


# ---------- RESPONSE ----------
class ProjectOut(BaseModel):
    id: int
    user_id: int
    name: str
    description: Optional[str] = None
    color: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # aggregates, computed on read
    total_time_seconds: int = 0
    total_entries: int = 0

    class Config:
        from_attributes = True


class ProjectResponse(BaseModel):
    success: bool = True
    project: ProjectOut
    message: Optional[str] = None


class ProjectListResponse(BaseModel):
    success: bool = True
    projects: List[ProjectOut]
