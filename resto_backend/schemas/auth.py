# resto_backend/schemas/auth.py
# type: ignore

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints

# Required free text: surrounding whitespace is dropped, blank is rejected.
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"value is not a valid email address: {e}") from e
    # stored and compared exactly as submitted (no case folding)
    return value


Email = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=255), AfterValidator(_check_email)
]

PASSWORD_MIN_LENGTH = 6


# ***************************************************************
# 1. Authentication schemas (JWT)
# ***************************************************************
class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    sub: Optional[str] = None
    email: Optional[str] = None
    exp: Optional[int] = None


class UserLogin(BaseModel):
    """Body of POST /api/auth/login."""
    email: Email
    password: str = Field(..., min_length=1)


# ***************************************************************
# 2. User schemas (request / response)
# ***************************************************************
class UserBase(BaseModel):
    name: NonEmptyStr = Field(..., max_length=255)
    email: Email


class UserCreate(UserBase):
    """Registration body. The password is hashed before it is stored."""
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH, max_length=255)

    model_config = ConfigDict(extra="forbid")


class UserPublic(UserBase):
    """
    Read model for a user. There is no credential field on this type, so
    whatever ORM row it is built from, the hash cannot be serialised.
    """
    id: UUID
    restaurant_id: Optional[UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


class Token(BaseModel):
    """Response of a successful login."""
    access_token: str
    token_type: str = "bearer"
    user: UserPublic
