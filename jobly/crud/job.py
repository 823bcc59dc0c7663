"""
CRUD operations for jobs.

Jobs belong to a company; their id and company can't change after creation.
"""

import logging
from typing import Any, Dict, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import fetch_all, fetch_one
from jobly.core.exceptions import ConflictError, NotFoundError
from jobly.core.filters import JOB_FILTER
from jobly.core.sql import ColumnMapper, check_update_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

JOB_COLUMNS = ColumnMapper({
    "companyHandle": "company_handle",
})

MUTABLE_FIELDS = frozenset({"title", "salary", "equity"})
IMMUTABLE_FIELDS = frozenset({"id", "companyHandle"})

_RETURNING = 'id, title, salary, equity, company_handle AS "companyHandle"'


def _ensure_company(db: Session, handle: str) -> None:
    company = fetch_one(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if not company:
        raise NotFoundError(f"No company: {handle}")


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a job.

    Args:
        db: Database session
        data: {title, salary, equity, companyHandle}

    Raises:
        NotFoundError: If the company doesn't exist
        ConflictError: If the company already lists this title at this salary
    """
    handle = data["companyHandle"]
    _ensure_company(db, handle)

    duplicate = fetch_one(
        db,
        """SELECT id
           FROM jobs
           WHERE company_handle = $1
             AND title = $2
             AND (salary = $3 OR (salary IS NULL AND $3 IS NULL))""",
        [handle, data["title"], data.get("salary")]
    )
    if duplicate:
        raise ConflictError(f"Duplicate job: {data['title']} at {handle}")

    try:
        job = fetch_one(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {_RETURNING}""",
            [data["title"], data.get("salary"), data.get("equity"), handle]
        )
    except IntegrityError:
        # The company was removed after the existence check
        db.rollback()
        raise ConflictError(f"Could not create job: {data['title']} at {handle}")
    db.commit()

    logger.info(f"Created job {job['id']}: {job['title']} at {handle}")
    return job


def find_all(db: Session) -> List[Dict[str, Any]]:
    return fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM jobs
            ORDER BY title, company_handle"""
    )


def get_for_company(db: Session, handle: str) -> List[Dict[str, Any]]:
    """
    Return all jobs posted by a company, ordered by title.

    Raises:
        NotFoundError: If the company doesn't exist
    """
    _ensure_company(db, handle)

    return fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM jobs
            WHERE company_handle = $1
            ORDER BY title""",
        [handle]
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    job = fetch_one(
        db,
        f"""SELECT {_RETURNING}
            FROM jobs
            WHERE id = $1""",
        [job_id]
    )
    if not job:
        raise NotFoundError(f"No job with id: {job_id}")
    return job


def update(db: Session, job_id: int, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update job data with `data`.

    This is a "partial update": only the provided fields change.
    Data can include: {title, salary, equity}

    Raises:
        ValidationError: If data is empty or tries to change id or companyHandle
        NotFoundError: If no job has this id
    """
    check_update_fields(data, MUTABLE_FIELDS, IMMUTABLE_FIELDS)
    assignments = sql_for_partial_update(data, JOB_COLUMNS)
    id_idx = len(assignments.values) + 1

    job = fetch_one(
        db,
        f"""UPDATE jobs
            SET {assignments.set_cols}
            WHERE id = ${id_idx}
            RETURNING {_RETURNING}""",
        [*assignments.values, job_id]
    )
    if not job:
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    logger.info(f"Updated job {job_id}: {', '.join(data)}")
    return job


def remove(db: Session, job_id: int) -> None:
    """
    Raises:
        NotFoundError: If no job has this id
    """
    deleted = fetch_one(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not deleted:
        raise NotFoundError(f"No job with id: {job_id}")

    db.commit()
    logger.info(f"Deleted job {job_id}")


def filter(db: Session, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Filter jobs by query string criteria.

    Recognized keys: title (case-insensitive partial match), minSalary,
    hasEquity (true limits to jobs with equity > 0; false adds no limit).

    Raises:
        ValidationError: If no recognized key is present or a value is invalid
    """
    predicate = JOB_FILTER.build(criteria)
    # hasEquity=false alone leaves nothing to filter on
    if not predicate:
        return find_all(db)

    return fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM jobs
            WHERE {predicate.where}
            ORDER BY title, company_handle""",
        predicate.values
    )
