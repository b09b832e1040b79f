# resto_backend/api/endpoints/users.py
# type: ignore

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from resto_backend.api.endpoints.auth import get_current_user
from resto_backend.core.exceptions import ConflictError, NotFoundError
from resto_backend.core.security import get_password_hash
from resto_backend.database import get_db
from resto_backend.models.auth import User
from resto_backend.repository import Repository
from resto_backend.schemas.auth import UserCreate, UserPublic
from resto_backend.schemas.platform import UserDetail

logger = logging.getLogger(__name__)

router = APIRouter()

EMAIL_IN_USE = "email in use"


# ***************************************************************
# Helpers (responses go through UserPublic/UserDetail, which have no credential)
# ***************************************************************
def register_user(db: Session, user_in: UserCreate) -> UserPublic:
    """Create a user after the email uniqueness check; stores only the hash."""
    users = Repository(db, User)
    if users.exists(email=user_in.email):
        logger.warning(f"Rejected registration, email already used: {user_in.email}")
        raise ConflictError(EMAIL_IN_USE)

    values = user_in.model_dump(exclude={"password"})
    values["password"] = get_password_hash(user_in.password)

    db_user = users.insert(values, conflict_detail=EMAIL_IN_USE)
    logger.info(f"Registered user {db_user.id}")
    return UserPublic.model_validate(db_user)


def get_user_or_404(db: Session, user_id: UUID) -> User:
    user = Repository(db, User).find_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


# ***************************************************************
# 1. Registration (public)
# ***************************************************************
@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register(user_in: UserCreate, db: Session = Depends(get_db)):
    """Register a new account."""
    return register_user(db, user_in)


# ***************************************************************
# 2. Reads (authenticated, unrestricted)
# ***************************************************************
@router.get("/profile", response_model=UserDetail)
def read_profile(current_user: User = Depends(get_current_user)):
    """The caller's own record with its restaurant and managed companies."""
    return UserDetail.model_validate(current_user)


@router.get("/{user_id}", response_model=UserDetail)
def read_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return UserDetail.model_validate(get_user_or_404(db, user_id))


@router.get("", response_model=List[UserDetail])
def read_users(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return [UserDetail.model_validate(user) for user in Repository(db, User).find_all()]
