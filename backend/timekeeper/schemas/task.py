from pydantic import BaseModel, field_validator
from datetime import datetime
from typing import Optional, List


def _clean_name(value: Optional[str]) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValueError("Task name is required")
    return cleaned


# ---------- CREATE ----------
class TaskCreate(BaseModel):
    project_id: int
    name: str
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str):
        return _clean_name(value)


# ---------- UPDATE ----------
class TaskUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    is_completed: Optional[bool] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: Optional[str]):
        return _clean_name(value)

    @field_validator("is_completed")
    @classmethod
    def validate_is_completed(cls, value: Optional[bool]):
        if value is None:
            raise ValueError("is_completed cannot be null")
        return value


# ---------- OUT ----------
class TaskOut(BaseModel):
    id: int
    project_id: int
    name: str
    description: Optional[str] = None
    is_completed: bool = False
    project_name: Optional[str] = None
    project_color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    pending: int = 0


class TaskResponse(BaseModel):
    success: bool = True
    task: TaskOut
    message: Optional[str] = None


class TaskListResponse(BaseModel):
    success: bool = True
    tasks: List[TaskOut]


class TaskStatsResponse(BaseModel):
    success: bool = True
    stats: TaskStats
