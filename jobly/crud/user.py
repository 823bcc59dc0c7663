"""
CRUD operations for users.

Passwords are stored as bcrypt hashes and never returned.
"""

import logging
from typing import Any, Dict
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import fetch_one
from jobly.core.exceptions import AuthenticationError, ConflictError, NotFoundError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import ColumnMapper, check_update_fields, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = ColumnMapper({
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
})

MUTABLE_FIELDS = frozenset({"firstName", "lastName", "password", "email", "isAdmin"})
IMMUTABLE_FIELDS = frozenset({"username"})

_RETURNING = (
    'username, first_name AS "firstName", last_name AS "lastName", '
    'email, is_admin AS "isAdmin"'
)


def authenticate(db: Session, username: str, password: str) -> Dict[str, Any]:
    """
    Return the user if the password matches.

    Raises:
        AuthenticationError: If the username or password is wrong
    """
    user = fetch_one(
        db,
        f"""SELECT {_RETURNING}, password
            FROM users
            WHERE username = $1""",
        [username]
    )
    if not user or not verify_password(password, user.pop("password")):
        raise AuthenticationError("Invalid username/password")
    return user


def register(db: Session, data: Dict[str, Any], is_admin: bool = False) -> Dict[str, Any]:
    """
    Create a user with a hashed password.

    Raises:
        ConflictError: If the username is taken
    """
    duplicate = fetch_one(
        db,
        "SELECT username FROM users WHERE username = $1",
        [data["username"]]
    )
    if duplicate:
        raise ConflictError(f"Duplicate username: {data['username']}")

    try:
        user = fetch_one(
            db,
            f"""INSERT INTO users
                    (username, password, first_name, last_name, email, is_admin)
                VALUES ($1, $2, $3, $4, $5, $6)
                RETURNING {_RETURNING}""",
            [
                data["username"],
                get_password_hash(data["password"]),
                data["firstName"],
                data["lastName"],
                data["email"],
                is_admin,
            ]
        )
    except IntegrityError:
        db.rollback()
        raise ConflictError(f"Duplicate username: {data['username']}")
    db.commit()

    logger.info(f"New user registered: {user['username']}")
    return user


def get(db: Session, username: str) -> Dict[str, Any]:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    user = fetch_one(
        db,
        f"""SELECT {_RETURNING}
            FROM users
            WHERE username = $1""",
        [username]
    )
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Partial update of a user; a new password is hashed before storage.

    Raises:
        ValidationError: If data is empty or names a field that can't change
        NotFoundError: If no user has this username
    """
    check_update_fields(data, MUTABLE_FIELDS, IMMUTABLE_FIELDS)
    if "password" in data:
        data = {**data, "password": get_password_hash(data["password"])}

    assignments = sql_for_partial_update(data, USER_COLUMNS)
    username_idx = len(assignments.values) + 1

    user = fetch_one(
        db,
        f"""UPDATE users
            SET {assignments.set_cols}
            WHERE username = ${username_idx}
            RETURNING {_RETURNING}""",
        [*assignments.values, username]
    )
    if not user:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Updated user {username}: {', '.join(data)}")
    return user


def remove(db: Session, username: str) -> None:
    deleted = fetch_one(
        db,
        "DELETE FROM users WHERE username = $1 RETURNING username",
        [username]
    )
    if not deleted:
        raise NotFoundError(f"No user: {username}")

    db.commit()
    logger.info(f"Deleted user {username}")
