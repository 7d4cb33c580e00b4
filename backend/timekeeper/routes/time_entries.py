from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timekeeper.core.dependencies import get_current_user
from timekeeper.core.errors import BadRequest, NotFound
from timekeeper.core.validation import require_project_owner
from timekeeper.database.session import get_db
from timekeeper.models.user import User
from timekeeper.schemas.time_entry import TimeEntryCreate, TimeEntryListResponse, TimeEntryResponse
from timekeeper.services.project_service import get_project_by_id
from timekeeper.services.task_service import get_task_by_id
from timekeeper.services.time_entry_service import create_time_entry, get_time_entries_by_user_id

router = APIRouter(prefix="/time-entries", tags=["Time Entries"])


@router.post("", response_model=TimeEntryResponse)
def create_time_entry_route(
    payload: TimeEntryCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    project = require_project_owner(get_project_by_id(db, payload.project_id), current_user)

    if payload.task_id is not None:
        task = get_task_by_id(db, payload.task_id)
        if not task:
            raise NotFound.for_resource("Task")
        if task.project_id != project.id:
            raise BadRequest("Task does not belong to project")

    entry = create_time_entry(db, current_user.id, payload)
    return {"success": True, "timeEntry": entry, "message": "Time entry created successfully"}


@router.get("", response_model=TimeEntryListResponse)
def get_time_entries(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"success": True, "timeEntries": get_time_entries_by_user_id(db, current_user.id)}
