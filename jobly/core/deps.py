"""
FastAPI dependencies for authentication and authorization.

These dependencies are used to protect endpoints and extract user context.
get_admin_user depends on get_current_user, so the privilege check can only
run once the token has been verified.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobly.core.exceptions import AuthenticationError, AuthorizationError
from jobly.core.security import decode_token
from jobly.schemas.token import IdentityClaims

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error is off so a missing header surfaces as our 401, not FastAPI's 403
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> IdentityClaims:
    """
    Extract and validate the current user from the JWT token.

    This dependency:
    1. Extracts the Bearer token from Authorization header
    2. Decodes and validates the JWT
    3. Stores the claims on request.state.user

    No database lookup happens here; the token is the only source of identity.

    Raises:
        AuthenticationError: If the token is missing, invalid or expired
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")

    claims = decode_token(credentials.credentials)
    request.state.user = claims
    return claims


async def get_admin_user(
    claims: IdentityClaims = Depends(get_current_user),
) -> IdentityClaims:
    """
    Get the current user and ensure they are an admin.

    Raises:
        AuthorizationError: If the user is not an admin
    """
    if not claims.is_admin:
        raise AuthorizationError("Admin privileges required")

    return claims
