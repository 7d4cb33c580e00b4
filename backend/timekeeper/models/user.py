from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from timekeeper.database.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # subject id issued by the external identity provider
    firebase_uid = Column(String(128), unique=True, index=True, nullable=False)
    email = Column(String(255), nullable=False)
    display_name = Column(String(255), nullable=True)
    avatar_url = Column(String, nullable=True)

    # 🔹 PREFERENCES
    timezone = Column(String(64), nullable=False, default="UTC")
    time_format = Column(String(8), nullable=False, default="24h")
    theme = Column(String(16), nullable=False, default="dark")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    projects = relationship(
        "Project",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    time_entries = relationship(
        "TimeEntry",
        back_populates="user",
        cascade="all, delete-orphan"
    )
