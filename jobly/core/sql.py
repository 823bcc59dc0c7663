"""
Helpers for building parameterized SQL from caller-supplied data.

Used by the PATCH routes to enable partial updates. SQL text is only ever
built from field names passed through a ColumnMapper and fixed syntax;
values are always bound as positional parameters ($1, $2, ...).
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping

from jobly.core.exceptions import ValidationError


class ColumnMapper:
    """
    Static mapping from API field names to storage column names.

    Names without an entry resolve to themselves.
    """

    def __init__(self, mapping: Mapping[str, str]):
        self._mapping = MappingProxyType(dict(mapping))

    def resolve(self, name: str) -> str:
        return self._mapping.get(name, name)

    def __repr__(self):
        return f"<ColumnMapper({dict(self._mapping)})>"


@dataclass(frozen=True)
class AssignmentResult:
    """SET clause fragments for an UPDATE and their bound values."""
    fragments: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    @property
    def set_cols(self) -> str:
        return ", ".join(self.fragments)


def sql_for_partial_update(data: Dict[str, Any], columns: ColumnMapper) -> AssignmentResult:
    """
    Build the SET clause for a partial update.

    Args:
        data: Fields to change, keyed by API field name, in the order they
            should be bound, e.g. {"firstName": "Aliya", "age": 32}
        columns: Entity column mapping, e.g. {"firstName": "first_name"}

    Returns:
        AssignmentResult whose set_cols is '"first_name"=$1, "age"=$2'
        and whose values are ["Aliya", 32]

    The caller appends its key parameter after the returned values:
        UPDATE table SET {set_cols} WHERE key = ${len(values) + 1}

    Raises:
        ValidationError: If data is empty
    """
    if not data:
        raise ValidationError("No data supplied")

    fragments = []
    values = []
    for idx, (name, value) in enumerate(data.items(), start=1):
        column = columns.resolve(name).replace('"', '""')
        fragments.append(f'"{column}"=${idx}')
        values.append(value)

    return AssignmentResult(fragments=fragments, values=values)


def check_update_fields(
    data: Dict[str, Any],
    mutable_fields: frozenset,
    immutable_fields: frozenset = frozenset()
) -> None:
    """
    Ensure a partial update only names fields the entity allows to change.

    Raises:
        ValidationError: Naming the first immutable or unknown field
    """
    for name in data:
        if name in immutable_fields:
            raise ValidationError(f"Field can not be changed: {name}")
        if name not in mutable_fields:
            raise ValidationError(f"Unknown field: {name}")
