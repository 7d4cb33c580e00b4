from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from timekeeper.core.dependencies import get_current_user
from timekeeper.core.errors import InternalError
from timekeeper.core.validation import require_project_owner, require_task_owner
from timekeeper.database.session import get_db
from timekeeper.models.user import User
from timekeeper.schemas.task import TaskCreate, TaskListResponse, TaskResponse, TaskUpdate
from timekeeper.schemas.user import MessageResponse
from timekeeper.services.project_service import get_project_by_id
from timekeeper.services.task_service import (
    create_task,
    delete_task,
    get_task_by_id,
    get_tasks_by_user_id,
    update_task,
)

router = APIRouter(prefix="/tasks", tags=["Tasks"])


# =====================================
# CREATE TASK (Only Project Owner)
# =====================================
@router.post("", response_model=TaskResponse)
def create_task_route(
    payload: TaskCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    # 🔐 Only owner can create tasks
    require_project_owner(get_project_by_id(db, payload.project_id), current_user)

    task = create_task(db, payload)
    return {"success": True, "task": task, "message": "Task created successfully"}


# =====================================
# GET TASKS (all of the caller's projects)
# =====================================
@router.get("", response_model=TaskListResponse)
def get_my_tasks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return {"success": True, "tasks": get_tasks_by_user_id(db, current_user.id)}


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = require_task_owner(get_task_by_id(db, task_id), current_user)
    return {"success": True, "task": task}


# =====================================
# UPDATE TASK
# =====================================
@router.put("/{task_id}", response_model=TaskResponse)
def update_task_route(
    task_id: int,
    payload: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = require_task_owner(get_task_by_id(db, task_id), current_user)
    task = update_task(db, task, payload)
    return {"success": True, "task": task, "message": "Task updated successfully"}


# =====================================
# DELETE TASK (hard delete)
# =====================================
@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task_route(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    task = require_task_owner(get_task_by_id(db, task_id), current_user)

    if not delete_task(db, task):
        raise InternalError("Failed to delete task")

    return {"success": True, "message": "Task deleted successfully"}
