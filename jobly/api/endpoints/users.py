from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_current_user, get_admin_user
from jobly.crud import user as user_crud
from jobly.schemas.token import IdentityClaims
from jobly.schemas.user import UserUpdateRequest, UserEnvelope

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/{username}", response_model=UserEnvelope)
def get_user(
    username: str,
    user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Authorization required: login"""
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope)
def update_user(
    username: str,
    request: UserUpdateRequest,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Patch user data.

    Fields can be: {firstName, lastName, password, email, isAdmin}
    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"user": user_crud.update(db, username, data)}


@router.delete("/{username}")
def delete_user(
    username: str,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Authorization required: admin"""
    user_crud.remove(db, username)
    return {"deleted": username}
