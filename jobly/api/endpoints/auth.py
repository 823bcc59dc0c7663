"""
Authentication endpoints.

- POST /auth/token: Exchange username/password for a JWT
- POST /auth/register: Create a (non-admin) user and return a JWT
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.security import create_access_token
from jobly.crud import user as user_crud
from jobly.schemas.token import TokenRequest, TokenResponse
from jobly.schemas.user import UserRegisterRequest

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/token", response_model=TokenResponse)
def login(request: TokenRequest, db: Session = Depends(get_db)):
    """Authenticate a user and return a token for later requests."""
    user = user_crud.authenticate(db, request.username, request.password)
    token = create_access_token(user["username"], is_admin=user["isAdmin"])
    return TokenResponse(token=token)


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(request: UserRegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    New accounts are never admins; an admin grants that with PATCH /users.
    """
    user = user_crud.register(db, request.model_dump(by_alias=True))
    token = create_access_token(user["username"], is_admin=user["isAdmin"])
    return TokenResponse(token=token)
