import logging

from sqlalchemy import case, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from timekeeper.config import settings
from timekeeper.models.project import Project
from timekeeper.models.time_entry import TimeEntry
from timekeeper.schemas.project import ProjectCreate, ProjectUpdate

logger = logging.getLogger(__name__)


def _total_seconds_column():
    # unfinished entries count as entries but contribute no time
    return func.coalesce(
        func.sum(
            case(
                (TimeEntry.end_time.isnot(None), TimeEntry.duration_seconds),
                else_=0
            )
        ),
        0
    ).label("total_time_seconds")


def create_project(db: Session, user_id: int, data: ProjectCreate) -> Project:
    project = Project(
        user_id=user_id,
        name=data.name,
        description=data.description,
        color=data.color or settings.DEFAULT_PROJECT_COLOR,
    )

    db.add(project)
    db.commit()
    db.refresh(project)

    logger.info("Project %s created for user %s", project.id, user_id)
    return project


def get_project_by_id(db: Session, project_id: int) -> Project | None:
    return db.query(Project).filter(Project.id == project_id).first()


def get_projects_with_time_summary(db: Session, user_id: int) -> list[tuple[Project, int, int]]:
    """Active projects of a user with ``(project, total_time_seconds, total_entries)``."""
    rows = db.query(
        Project,
        _total_seconds_column(),
        func.count(TimeEntry.id).label("total_entries")
    ).outerjoin(
        TimeEntry, TimeEntry.project_id == Project.id
    ).filter(
        Project.user_id == user_id,
        Project.is_active == True,  # noqa: E712
    ).group_by(Project.id).order_by(
        Project.created_at.desc(),
        Project.id.desc()
    ).all()

    return [(project, int(total or 0), int(count or 0)) for project, total, count in rows]


def get_project_time_summary(db: Session, project_id: int) -> tuple[int, int]:
    total, count = db.query(
        _total_seconds_column(),
        func.count(TimeEntry.id)
    ).filter(TimeEntry.project_id == project_id).one()

    return int(total or 0), int(count or 0)


def update_project(db: Session, project: Project, data: ProjectUpdate) -> Project:
    # only the columns declared on ProjectUpdate can be written
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(project, key, value)

    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project: Project) -> bool:
    """Soft delete: the row and its time entries stay for reporting."""
    try:
        project.is_active = False
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting project %s", project.id)
        return False

    logger.info("Project %s deactivated", project.id)
    return True
