import logging

from sqlalchemy import desc
from sqlalchemy.orm import Session, joinedload

from timekeeper.models.project import Project
from timekeeper.models.time_entry import TimeEntry
from timekeeper.schemas.time_entry import TimeEntryCreate

logger = logging.getLogger(__name__)


def create_time_entry(db: Session, user_id: int, data: TimeEntryCreate) -> TimeEntry:
    entry = TimeEntry(
        user_id=user_id,
        project_id=data.project_id,
        task_id=data.task_id,
        description=data.description,
        start_time=data.start_time,
        end_time=data.end_time,
        duration_seconds=data.duration_seconds,
    )

    db.add(entry)
    db.commit()
    db.refresh(entry)

    logger.info(
        "Time entry %s recorded for project %s (%s seconds)",
        entry.id, entry.project_id, entry.duration_seconds
    )
    return entry


def get_time_entries_by_user_id(db: Session, user_id: int) -> list[TimeEntry]:
    return db.query(TimeEntry).options(
        joinedload(TimeEntry.project),
        joinedload(TimeEntry.task)
    ).filter(
        TimeEntry.user_id == user_id
    ).order_by(desc(TimeEntry.start_time), desc(TimeEntry.id)).all()


def get_time_entries_by_project_id(
    db: Session,
    project_id: int,
    user_id: int,
    limit: int = 50
) -> list[TimeEntry]:
    # ownership is part of the query, a foreign project yields no rows
    return db.query(TimeEntry).join(
        Project, TimeEntry.project_id == Project.id
    ).options(
        joinedload(TimeEntry.project),
        joinedload(TimeEntry.task)
    ).filter(
        TimeEntry.project_id == project_id,
        Project.user_id == user_id
    ).order_by(desc(TimeEntry.start_time), desc(TimeEntry.id)).limit(limit).all()
