# resto_backend/core/security.py
# type: ignore
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional, Union

from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from resto_backend.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, ALGORITHM, SECRET_KEY
from resto_backend.core.exceptions import AuthenticationError
from resto_backend.schemas.auth import TokenPayload

# ***************************************************************
# 1. Security settings
# ***************************************************************

# Password hashing context (pbkdf2_sha256)
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

# Bearer token scheme for protected endpoints. auto_error is off so a
# missing header goes through AuthenticationError like any other bad token.
reusable_oauth2 = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# ***************************************************************
# 2. Credential store: password hashing
# ***************************************************************

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a plaintext password against its stored hash."""
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """Hash a plaintext password for storage."""
    return pwd_context.hash(password)

# ***************************************************************
# 3. Token issuer: JWT creation and parsing
# ***************************************************************

def create_access_token(
    subject: Union[str, Any],
    claims: Optional[Dict[str, Any]] = None,
    expires_delta: timedelta = None,
) -> str:
    """Issue a signed access token for `subject` carrying extra `claims`."""
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = dict(claims or {})
    to_encode.update({"exp": expire, "sub": str(subject)})

    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_token(token: Optional[str]) -> TokenPayload:
    """Decode and validate a JWT. Raises AuthenticationError on any failure."""
    if not token:
        raise AuthenticationError("Not authenticated", error_code="TOKEN_MISSING")
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
        token_data = TokenPayload(**payload)
    except (JWTError, ValidationError, TypeError) as e:
        raise AuthenticationError(
            "Invalid or expired token", error_code="TOKEN_INVALID"
        ) from e

    if token_data.sub is None:
        raise AuthenticationError("Token has no subject", error_code="TOKEN_INVALID")
    return token_data
