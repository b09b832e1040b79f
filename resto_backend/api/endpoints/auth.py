# resto_backend/api/endpoints/auth.py
# type: ignore

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from resto_backend.core.exceptions import AuthenticationError
from resto_backend.core.security import (
    create_access_token,
    decode_token,
    reusable_oauth2,
    verify_password,
)
from resto_backend.database import get_db
from resto_backend.models.auth import User
from resto_backend.repository import Repository
from resto_backend.schemas.auth import Token, UserLogin, UserPublic

logger = logging.getLogger(__name__)

router = APIRouter()


# ***************************************************************
# 1. Credential check
# ***************************************************************
def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    """Return the user when email and password match, otherwise None."""
    user = Repository(db, User).find_one_by(email=email)
    if user is None or not verify_password(password, user.password):
        return None
    return user


# ***************************************************************
# 2. Dependency: the authenticated user of the request
# ***************************************************************
def get_current_user(
    db: Session = Depends(get_db), token: Optional[str] = Depends(reusable_oauth2)
) -> User:
    """Decode the bearer token and load its subject. Every failure is a 401."""
    token_data = decode_token(token)

    user = Repository(db, User).find_by_id(_parse_subject(token_data.sub))
    if user is None:
        raise AuthenticationError("User for this token no longer exists", error_code="TOKEN_INVALID")
    return user


def _parse_subject(sub: str) -> UUID:
    try:
        return UUID(sub)
    except ValueError as e:
        raise AuthenticationError("Invalid or expired token", error_code="TOKEN_INVALID") from e


# ***************************************************************
# 3. Login endpoint
# ***************************************************************
@router.post("/login", response_model=Token)
def login_for_access_token(user_in: UserLogin, db: Session = Depends(get_db)):
    """Authenticate with email and password; returns a JWT and the user."""
    user = authenticate_user(db, user_in.email, user_in.password)
    if user is None:
        logger.warning(f"Failed login for {user_in.email}")
        raise AuthenticationError("Invalid email or password", error_code="INVALID_CREDENTIALS")

    access_token = create_access_token(subject=user.id, claims={"email": user.email})
    logger.info(f"User {user.id} logged in")

    return Token(access_token=access_token, user=UserPublic.model_validate(user))
