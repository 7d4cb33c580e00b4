from pydantic import BaseModel, EmailStr, field_validator
from datetime import datetime
from typing import Optional


TIME_FORMATS = {"12h", "24h"}
THEMES = {"light", "dark", "system"}


# ---------- CREATE ----------
class UserCreate(BaseModel):
    firebase_uid: str
    email: EmailStr
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

    @field_validator("firebase_uid")
    @classmethod
    def validate_firebase_uid(cls, value: str):
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("This field is required")
        return cleaned


# ---------- UPDATE ----------
class UserUpdate(BaseModel):
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    timezone: Optional[str] = None
    time_format: Optional[str] = None
    theme: Optional[str] = None

    @field_validator("timezone", "time_format", "theme")
    @classmethod
    def reject_null(cls, value: Optional[str]):
        if value is None or not value.strip():
            raise ValueError("This field cannot be empty")
        return value.strip()

    @field_validator("time_format")
    @classmethod
    def validate_time_format(cls, value: str):
        if value not in TIME_FORMATS:
            raise ValueError("Time format must be 12h or 24h")
        return value

    @field_validator("theme")
    @classmethod
    def validate_theme(cls, value: str):
        if value not in THEMES:
            raise ValueError("Theme must be light, dark or system")
        return value


# ---------- RESPONSE ----------
class UserOut(BaseModel):
    id: int
    firebase_uid: str
    email: EmailStr
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    timezone: str = "UTC"
    time_format: str = "24h"
    theme: str = "dark"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class UserResponse(BaseModel):
    success: bool = True
    user: UserOut
    message: Optional[str] = None


class MessageResponse(BaseModel):
    success: bool = True
    message: str
