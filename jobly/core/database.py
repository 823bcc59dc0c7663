import re
from typing import Any, Dict, List, Sequence, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Result
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.sql.elements import TextClause
from jobly.core.config import settings

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
    pool_size=10,  # Connection pool size
    max_overflow=20  # Allow up to 20 connections beyond pool_size
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Create Base class for models
Base = declarative_base()

_POSITIONAL = re.compile(r"\$(\d+)")


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def bind_positional(sql: str, values: Sequence[Any]) -> Tuple[TextClause, Dict[str, Any]]:
    """
    Convert $1, $2, ... placeholders into named SQLAlchemy bind parameters.

    Returns:
        (text clause, params dict) ready for Session.execute

    Raises:
        ValueError: If a placeholder has no matching value
    """
    def replace(match):
        position = int(match.group(1))
        if position < 1 or position > len(values):
            raise ValueError(f"No value bound for ${position}")
        return f":p{position}"

    statement = text(_POSITIONAL.sub(replace, sql))
    params = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    return statement, params


def execute(db: Session, sql: str, values: Sequence[Any] = ()) -> Result:
    """Execute a single statement written with $N placeholders."""
    statement, params = bind_positional(sql, values)
    return db.execute(statement, params)


def fetch_all(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    return [dict(row) for row in execute(db, sql, values).mappings().all()]


def fetch_one(db: Session, sql: str, values: Sequence[Any] = ()):
    row = execute(db, sql, values).mappings().first()
    return dict(row) if row is not None else None


def init_db():
    """
    Initialize database.

    Imports the models so their tables are registered on Base.metadata.
    Tables are only created when CREATE_TABLES is set; schema changes are
    managed outside the application.
    """
    from jobly.models import company, job, user  # noqa: F401  Import models to register them
    if settings.CREATE_TABLES:
        Base.metadata.create_all(bind=engine)
