from pydantic import BaseModel, Field, field_validator, model_validator
from datetime import datetime, timezone
from typing import Optional, List


# task reference meaning "no task selected"
NO_TASK = "no-task"


# ---------- CREATE ----------
class TimeEntryCreate(BaseModel):
    project_id: int
    task_id: Optional[int] = None
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: Optional[int] = Field(default=None, ge=0)

    @field_validator("task_id", mode="before")
    @classmethod
    def map_no_task(cls, value):
        if value in (None, "", NO_TASK):
            return None
        return value

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_to_utc(cls, value: Optional[datetime]):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @field_validator("description")
    @classmethod
    def blank_description_to_none(cls, value: Optional[str]):
        if value is None:
            return None
        return value.strip() or None

    @model_validator(mode="after")
    def validate_times(self):
        if self.end_time is not None and self.end_time < self.start_time:
            raise ValueError("End time cannot be before start time")
        return self


# ---------- OUT ----------
class TimeEntryOut(BaseModel):
    id: int
    user_id: int
    project_id: int
    task_id: Optional[int] = None
    description: Optional[str] = None
    start_time: datetime
    end_time: Optional[datetime] = None
    duration_seconds: Optional[int] = None
    created_at: Optional[datetime] = None

    project_name: Optional[str] = None
    project_color: Optional[str] = None
    task_name: Optional[str] = None

    class Config:
        from_attributes = True


class TimeEntryResponse(BaseModel):
    success: bool = True
    timeEntry: TimeEntryOut
    message: Optional[str] = None


class TimeEntryListResponse(BaseModel):
    success: bool = True
    timeEntries: List[TimeEntryOut]
