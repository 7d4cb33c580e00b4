import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from timekeeper.models.time_entry import TimeEntry
from timekeeper.models.user import User
from timekeeper.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def get_user_by_firebase_uid(db: Session, firebase_uid: str) -> User | None:
    return db.query(User).filter(User.firebase_uid == firebase_uid).first()


def create_user(db: Session, data: UserCreate) -> User:
    """Insert a user, or refresh the identity fields of the existing row.

    ``firebase_uid`` is unique, so a concurrent first login that loses the
    insert race falls through to the update branch.
    """
    user = User(
        firebase_uid=data.firebase_uid,
        email=data.email,
        display_name=data.display_name,
        avatar_url=data.avatar_url,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        user = get_user_by_firebase_uid(db, data.firebase_uid)
        if user is None:
            raise
        user.email = data.email
        user.display_name = data.display_name
        user.avatar_url = data.avatar_url
        db.commit()

    db.refresh(user)
    logger.info("User %s registered", user.id)
    return user


def update_user(db: Session, user: User, data: UserUpdate) -> User:
    updates = data.model_dump(exclude_unset=True)
    for field, value in updates.items():
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user: User) -> bool:
    user_id = user.id
    try:
        # entries reference both the user and its projects, drop them first
        db.query(TimeEntry).filter(TimeEntry.user_id == user_id).delete(synchronize_session=False)
        db.expire(user)
        db.delete(user)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error deleting user %s", user_id)
        return False

    logger.info("User %s deleted", user_id)
    return True
