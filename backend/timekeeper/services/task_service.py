import logging

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from timekeeper.models.project import Project
from timekeeper.models.task import Task
from timekeeper.schemas.task import TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)


def create_task(db: Session, data: TaskCreate) -> Task:
    task = Task(
        project_id=data.project_id,
        name=data.name,
        description=data.description,
    )

    db.add(task)
    db.commit()
    db.refresh(task)

    logger.info("Task %s created in project %s", task.id, task.project_id)
    return task


def get_task_by_id(db: Session, task_id: int) -> Task | None:
    return db.query(Task).options(joinedload(Task.project)).filter(Task.id == task_id).first()


def get_tasks_by_project_id(db: Session, project_id: int) -> list[Task]:
    return db.query(Task).filter(
        Task.project_id == project_id
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def get_tasks_by_user_id(db: Session, user_id: int) -> list[Task]:
    """All tasks of a user across projects, owner resolved through the project."""
    return db.query(Task).join(
        Project, Task.project_id == Project.id
    ).options(joinedload(Task.project)).filter(
        Project.user_id == user_id
    ).order_by(Task.created_at.desc(), Task.id.desc()).all()


def update_task(db: Session, task: Task, data: TaskUpdate) -> Task:
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(task, key, value)

    db.commit()
    db.refresh(task)
    return task


def delete_task(db: Session, task: Task) -> bool:
    task_id = task.id
    try:
        db.delete(task)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting task %s", task_id)
        return False

    logger.info("Task %s deleted", task_id)
    return True


def get_task_stats_by_project_id(db: Session, project_id: int) -> dict:
    total, completed = db.query(
        func.count(Task.id),
        func.coalesce(func.sum(case((Task.is_completed == True, 1), else_=0)), 0)  # noqa: E712
    ).filter(Task.project_id == project_id).one()

    total = int(total or 0)
    completed = int(completed or 0)
    return {
        "total": total,
        "completed": completed,
        "pending": total - completed,
    }
