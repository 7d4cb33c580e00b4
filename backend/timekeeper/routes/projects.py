from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timekeeper.config import settings
from timekeeper.core.dependencies import get_current_user
from timekeeper.core.errors import InternalError
from timekeeper.core.validation import require_project_owner
from timekeeper.database.session import get_db
from timekeeper.models.project import Project
from timekeeper.models.user import User
from timekeeper.schemas.project import (
    ProjectCreate,
    ProjectListResponse,
    ProjectOut,
    ProjectResponse,
    ProjectUpdate,
)
from timekeeper.schemas.task import TaskListResponse, TaskStatsResponse
from timekeeper.schemas.time_entry import TimeEntryListResponse
from timekeeper.schemas.user import MessageResponse
from timekeeper.services.project_service import (
    create_project,
    delete_project,
    get_project_by_id,
    get_project_time_summary,
    get_projects_with_time_summary,
    update_project,
)
from timekeeper.services.task_service import get_task_stats_by_project_id, get_tasks_by_project_id
from timekeeper.services.time_entry_service import get_time_entries_by_project_id


router = APIRouter(prefix="/projects", tags=["Projects"])


def serialize_project(project: Project, total_time_seconds: int = 0, total_entries: int = 0) -> dict:
    payload = ProjectOut.model_validate(project).model_dump()
    payload["total_time_seconds"] = total_time_seconds
    payload["total_entries"] = total_entries
    return payload


def _serialize_with_summary(db: Session, project: Project) -> dict:
    total_time_seconds, total_entries = get_project_time_summary(db, project.id)
    return serialize_project(project, total_time_seconds, total_entries)


@router.post("", response_model=ProjectResponse)
def create_project_route(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = create_project(db, current_user.id, data)
    return {
        "success": True,
        "project": serialize_project(project),
        "message": "Project created successfully",
    }


@router.get("", response_model=ProjectListResponse)
def get_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    rows = get_projects_with_time_summary(db, current_user.id)
    return {
        "success": True,
        "projects": [serialize_project(project, total, count) for project, total, count in rows],
    }


@router.get("/{project_id}", response_model=ProjectResponse)
def get_project_detail(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, project_id), current_user)
    return {"success": True, "project": _serialize_with_summary(db, project)}


@router.put("/{project_id}", response_model=ProjectResponse)
def update_project_route(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, project_id), current_user)
    project = update_project(db, project, data)
    return {
        "success": True,
        "project": _serialize_with_summary(db, project),
        "message": "Project updated successfully",
    }


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project_route(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, project_id), current_user)

    if not delete_project(db, project):
        raise InternalError("Failed to delete project")

    return {"success": True, "message": "Project deleted successfully"}


@router.get("/{project_id}/tasks", response_model=TaskListResponse)
def get_project_tasks(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, project_id), current_user)
    return {"success": True, "tasks": get_tasks_by_project_id(db, project.id)}


@router.get("/{project_id}/task-stats", response_model=TaskStatsResponse)
def get_project_task_stats(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, project_id), current_user)
    return {"success": True, "stats": get_task_stats_by_project_id(db, project.id)}


@router.get("/{project_id}/time-entries", response_model=TimeEntryListResponse)
def get_project_time_entries(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    entries = get_time_entries_by_project_id(
        db,
        project_id,
        current_user.id,
        limit=settings.PROJECT_TIME_ENTRIES_LIMIT
    )
    return {"success": True, "timeEntries": entries}
