"""
CRUD operations for companies.

Every operation runs fixed SQL templates through core.database.execute;
caller data only reaches the statement as bound parameters, via the
partial-update and filter builders.
"""

import logging
from typing import Any, Dict, List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import fetch_all, fetch_one
from jobly.core.exceptions import ConflictError, NotFoundError
from jobly.core.filters import COMPANY_FILTER
from jobly.core.sql import ColumnMapper, check_update_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = ColumnMapper({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

MUTABLE_FIELDS = frozenset({"name", "description", "numEmployees", "logoUrl"})
IMMUTABLE_FIELDS = frozenset({"handle"})

_RETURNING = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)


def create(db: Session, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a company.

    Args:
        db: Database session
        data: {handle, name, description, numEmployees, logoUrl}

    Returns:
        The created company

    Raises:
        ConflictError: If a company with the same handle or name exists
    """
    duplicate = fetch_one(
        db,
        "SELECT handle FROM companies WHERE handle = $1",
        [data["handle"]]
    )
    if duplicate:
        raise ConflictError(f"Duplicate company: {data['handle']}")

    try:
        company = fetch_one(
            db,
            f"""INSERT INTO companies
                    (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {_RETURNING}""",
            [
                data["handle"],
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ]
        )
    except IntegrityError:
        # Unique name, or a concurrent create of the same handle
        db.rollback()
        raise ConflictError(f"Duplicate company: {data['handle']} ({data['name']})")
    db.commit()

    logger.info(f"Created company {company['handle']}")
    return company


def find_all(db: Session) -> List[Dict[str, Any]]:
    """Return all companies ordered by name."""
    return fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM companies
            ORDER BY name"""
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """
    Return a company and the jobs it has posted.

    Raises:
        NotFoundError: If no company has this handle
    """
    company = fetch_one(
        db,
        f"""SELECT {_RETURNING}
            FROM companies
            WHERE handle = $1""",
        [handle]
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = fetch_all(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle]
    )
    return company


def update(db: Session, handle: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Update company data with `data`.

    This is a "partial update": only the provided fields change.
    Data can include: {name, description, numEmployees, logoUrl}

    Raises:
        ValidationError: If data is empty or names a field that can't change
        NotFoundError: If no company has this handle
        ConflictError: If the new name belongs to another company
    """
    check_update_fields(data, MUTABLE_FIELDS, IMMUTABLE_FIELDS)
    assignments = sql_for_partial_update(data, COMPANY_COLUMNS)
    handle_idx = len(assignments.values) + 1

    try:
        company = fetch_one(
            db,
            f"""UPDATE companies
                SET {assignments.set_cols}
                WHERE handle = ${handle_idx}
                RETURNING {_RETURNING}""",
            [*assignments.values, handle]
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Duplicate company name: {data.get('name')}")
    if not company:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Updated company {handle}: {', '.join(data)}")
    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company (and, by cascade, its jobs).

    Raises:
        NotFoundError: If no company has this handle
    """
    deleted = fetch_one(
        db,
        "DELETE FROM companies WHERE handle = $1 RETURNING handle",
        [handle]
    )
    if not deleted:
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info(f"Deleted company {handle}")


def filter(db: Session, criteria: Dict[str, Any]) -> List[Dict[str, Any]]:
    """
    Filter companies by query string criteria.

    Recognized keys: nameLike (case-insensitive partial match),
    minEmployees, maxEmployees. An empty result is a valid answer.

    Raises:
        ValidationError: If no recognized key is present or min > max
    """
    predicate = COMPANY_FILTER.build(criteria)
    if not predicate:
        return find_all(db)

    return fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM companies
            WHERE {predicate.where}
            ORDER BY name""",
        predicate.values
    )
