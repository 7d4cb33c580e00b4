from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from timekeeper.core.errors import NotFound, Unauthenticated
from timekeeper.database.session import get_db
from timekeeper.models.user import User
from timekeeper.services.user_service import get_user_by_firebase_uid

bearer_scheme = HTTPBearer(auto_error=False)


def get_firebase_uid(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme)
) -> str:
    # the bearer value is the identity provider subject id, verified upstream
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Missing or invalid authorization header")

    firebase_uid = credentials.credentials.strip()
    if not firebase_uid:
        raise Unauthenticated("Missing or invalid authorization header")

    return firebase_uid


def get_current_user(
    db: Session = Depends(get_db),
    firebase_uid: str = Depends(get_firebase_uid)
) -> User:
    user = get_user_by_firebase_uid(db, firebase_uid)
    if not user:
        raise NotFound.for_resource("User")
    return user
