from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from jobly.core.database import get_db
from jobly.core.deps import get_current_user, get_admin_user
from jobly.crud import job as job_crud
from jobly.schemas.job import JobCreateRequest, JobUpdateRequest, JobEnvelope, JobListEnvelope
from jobly.schemas.token import IdentityClaims

router = APIRouter(prefix="/jobs", tags=["Jobs"])


@router.post("/", status_code=201, response_model=JobEnvelope)
def create_job(
    request: JobCreateRequest,
    user: IdentityClaims = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a job posting for an existing company.

    Authorization required: login
    """
    job = job_crud.create(db, request.model_dump(by_alias=True))
    return {"job": job}


@router.get("/", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs, optionally filtered.

    Query parameters:
        title: case-insensitive partial match
        minSalary: lowest acceptable salary
        hasEquity: true to only list jobs offering equity
    """
    if not request.query_params:
        jobs = job_crud.find_all(db)
    else:
        jobs = job_crud.filter(db, dict(request.query_params))
    return {"jobs": jobs}


@router.get("/id/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return {"job": job_crud.get(db, job_id)}


@router.get("/{handle}", response_model=JobListEnvelope)
def list_company_jobs(handle: str, db: Session = Depends(get_db)):
    """List all jobs posted by the company with this handle."""
    return {"jobs": job_crud.get_for_company(db, handle)}


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int,
    request: JobUpdateRequest,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """
    Patch job data.

    Fields can be: {title, salary, equity}
    Authorization required: admin
    """
    data = request.model_dump(by_alias=True, exclude_unset=True)
    return {"job": job_crud.update(db, job_id, data)}


@router.delete("/{job_id}")
def delete_job(
    job_id: int,
    admin: IdentityClaims = Depends(get_admin_user),
    db: Session = Depends(get_db)
):
    """Authorization required: admin"""
    job_crud.remove(db, job_id)
    return {"deleted": job_id}
