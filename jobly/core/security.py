"""
Security utilities for JWT authentication and password hashing.

Implements stateless JWT authentication signed with the shared SECRET_KEY.
Passwords are hashed using bcrypt with a configurable work factor.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from jobly.core.config import settings
from jobly.core.exceptions import AuthenticationError
from jobly.schemas.token import IdentityClaims

# Password hashing context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_WORK_FACTOR
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def create_access_token(
    subject: str,
    is_admin: bool = False,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed JWT access token.

    Args:
        subject: Username the token identifies
        is_admin: Whether the user may call admin-only routes
        expires_delta: Optional lifetime (default: ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Encoded JWT token as a string
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": subject,
        "isAdmin": is_admin,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_token(token: str) -> IdentityClaims:
    """
    Decode and validate a JWT token.

    Args:
        token: The JWT token to decode

    Returns:
        IdentityClaims for the token's subject

    Raises:
        AuthenticationError: If the token is malformed, its signature doesn't
            verify, it has expired, or it lacks exp, iat or sub claims
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_iat": True}
        )
    except JWTError:
        raise AuthenticationError("Could not validate credentials")

    subject = payload.get("sub")
    is_admin = payload.get("isAdmin", False)
    issued_at = payload.get("iat")
    if not isinstance(subject, str) or not subject:
        raise AuthenticationError("Could not validate credentials")
    if not isinstance(is_admin, bool) or not isinstance(issued_at, (int, float)):
        raise AuthenticationError("Could not validate credentials")

    return IdentityClaims(
        subject=subject,
        is_admin=is_admin,
        issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc)
    )
