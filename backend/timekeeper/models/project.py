from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Boolean,
    DateTime,
    ForeignKey,
)
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from timekeeper.database.base import Base


DEFAULT_PROJECT_COLOR = "#F4D03F"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color = Column(String(7), nullable=False, default=DEFAULT_PROJECT_COLOR)

    # soft delete flag, inactive projects stay addressable by id
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


    # ===============================
    # Relationships
    # ===============================

    user = relationship("User", back_populates="projects")

    # tasks under this project
    tasks = relationship(
        "Task",
        back_populates="project",
        cascade="all, delete-orphan"
    )

    # projects are only soft deleted, entries are never touched from this side
    time_entries = relationship("TimeEntry", back_populates="project", passive_deletes="all")
