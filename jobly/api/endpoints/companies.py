from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_admin_user
from jobly.crud import company as company_crud
from jobly.schemas.company import (
    CompanyCreateRequest,
    CompanyUpdateRequest,
    CompanyEnvelope,
    CompanyDetailEnvelope,
    CompanyListEnvelope,
)
from jobly.schemas.token import IdentityClaims

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("/", status_code=201, response_model=CompanyEnvelope)
def create_company(
    request: CompanyCreateRequest,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Create a company. Authorization required: admin"""
    company = company_crud.create(db, request.model_dump(by_alias=True))
    return {"company": company}


@router.get("/", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies, optionally filtered.

    Query parameters:
        nameLike: case-insensitive partial match on name
        minEmployees / maxEmployees: bounds on number of employees

    A query string with none of these is rejected with 400.
    """
    if not request.query_params:
        companies = company_crud.find_all(db)
    else:
        companies = company_crud.filter(db, dict(request.query_params))
    return {"companies": companies}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company with the jobs it has posted."""
    return {"company": company_crud.get(db, handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    request: CompanyUpdateRequest,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Patch company data.

    Fields can be: {name, description, numEmployees, logoUrl}
    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"company": company_crud.update(db, handle, data)}


@router.delete("/{handle}")
def delete_company(
    handle: str,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Authorization required: admin"""
    company_crud.remove(db, handle)
    return {"deleted": handle}
