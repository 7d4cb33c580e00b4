from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from timekeeper.core.dependencies import get_current_user
from timekeeper.core.errors import BadRequest, InternalError, NotFound
from timekeeper.database.session import get_db
from timekeeper.models.user import User
from timekeeper.schemas.user import MessageResponse, UserCreate, UserResponse, UserUpdate
from timekeeper.services.user_service import (
    create_user,
    delete_user,
    get_user_by_firebase_uid,
    update_user,
)


router = APIRouter(prefix="/users", tags=["Users"])


# ---------------- REGISTER ----------------
@router.post("", response_model=UserResponse)
def register_user(
    data: UserCreate,
    db: Session = Depends(get_db)
):
    existing_user = get_user_by_firebase_uid(db, data.firebase_uid)
    if existing_user:
        return {"success": True, "user": existing_user, "message": "User already exists"}

    user = create_user(db, data)
    return {"success": True, "user": user, "message": "User created successfully"}


# ---------------- LOOKUP ----------------
@router.get("", response_model=UserResponse)
def get_user(
    firebase_uid: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    if not firebase_uid:
        raise BadRequest("Missing firebase_uid parameter")

    user = get_user_by_firebase_uid(db, firebase_uid)
    if not user:
        raise NotFound.for_resource("User")

    return {"success": True, "user": user}


# ---------------- SETTINGS ----------------
@router.put("/me", response_model=UserResponse)
def update_settings(
    data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    user = update_user(db, current_user, data)
    return {"success": True, "user": user, "message": "User updated successfully"}


@router.delete("/me", response_model=MessageResponse)
def delete_account(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    if not delete_user(db, current_user):
        raise InternalError("Failed to delete user")

    return {"success": True, "message": "User deleted successfully"}
