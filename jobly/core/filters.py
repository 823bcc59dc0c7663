"""
Search filters for the list endpoints.

A FilterBuilder turns the raw query string of GET /companies or GET /jobs
into a WHERE predicate with positional parameters. Each entity declares the
keys it recognizes; anything else in the query string is ignored.

    COMPANY_FILTER.build({"nameLike": "tech", "minEmployees": "5"})
    # where:  "name ILIKE $1 AND num_employees >= $2"
    # values: ["%tech%", 5]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from jobly.core.exceptions import ValidationError

CONTAINS = "contains"
MIN = "min"
MAX = "max"
FLAG = "flag"

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no"}


@dataclass(frozen=True)
class FilterField:
    """A recognized query-string key and the column it constrains."""
    column: str
    kind: str


@dataclass(frozen=True)
class PredicateResult:
    """
    WHERE clause fragments and their bound values.

    Can be empty when only false boolean flags were supplied, so check
    truthiness before interpolating `where` into a statement.
    """
    fragments: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    @property
    def where(self) -> str:
        return " AND ".join(self.fragments)

    def __bool__(self) -> bool:
        return bool(self.fragments)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _to_count(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be a non-negative integer")
    # Plain ASCII digits only; int() would also take "1_000" or " 5 "
    text = str(value)
    if not (text.isascii() and text.isdigit()):
        raise ValidationError(f"{key} must be a non-negative integer")
    return int(text)


def _to_flag(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValidationError(f"{key} must be true or false")


class FilterBuilder:
    """
    Builds a search predicate for one entity.

    Args:
        fields: Recognized query keys mapped to the column and the kind of
            comparison they express
        ranges: (min key, max key) pairs that bound the same quantity
    """

    def __init__(
        self,
        fields: Mapping[str, FilterField],
        ranges: Tuple[Tuple[str, str], ...] = ()
    ):
        self.fields = dict(fields)
        self.ranges = ranges

    def build(self, criteria: Dict[str, Any]) -> PredicateResult:
        """
        Build the predicate for the given search criteria.

        Raises:
            ValidationError: If no recognized key has a value, a value can't
                be coerced, or a minimum exceeds its maximum
        """
        present = {
            key: value for key, value in criteria.items()
            if key in self.fields and not _is_blank(value)
        }
        if not present:
            raise ValidationError("Invalid search criteria")

        coerced = {key: self._coerce(key, value) for key, value in present.items()}

        for low, high in self.ranges:
            if low in coerced and high in coerced and coerced[low] > coerced[high]:
                raise ValidationError(f"Invalid request, {low} can not exceed {high}")

        fragments = []
        values = []
        for key, value in coerced.items():
            fragment = self._fragment(self.fields[key], value, len(values) + 1)
            if fragment is None:
                continue
            clause, bound = fragment
            fragments.append(clause)
            if bound is not None:
                values.append(bound)

        return PredicateResult(fragments=fragments, values=values)

    def _coerce(self, key: str, value: Any) -> Any:
        kind = self.fields[key].kind
        if kind in (MIN, MAX):
            return _to_count(key, value)
        if kind == FLAG:
            return _to_flag(key, value)
        return str(value)

    @staticmethod
    def _fragment(spec: FilterField, value: Any, position: int) -> Optional[Tuple[str, Any]]:
        if spec.kind == CONTAINS:
            return f"{spec.column} ILIKE ${position}", f"%{value}%"
        if spec.kind == MIN:
            return f"{spec.column} >= ${position}", value
        if spec.kind == MAX:
            return f"{spec.column} <= ${position}", value
        # Flags only narrow the result set; false adds no constraint
        if value:
            return f"{spec.column} > 0", None
        return None


COMPANY_FILTER = FilterBuilder(
    {
        "nameLike": FilterField("name", CONTAINS),
        "minEmployees": FilterField("num_employees", MIN),
        "maxEmployees": FilterField("num_employees", MAX),
    },
    ranges=(("minEmployees", "maxEmployees"),),
)

JOB_FILTER = FilterBuilder(
    {
        "title": FilterField("title", CONTAINS),
        "minSalary": FilterField("salary", MIN),
        "hasEquity": FilterField("equity", FLAG),
    },
)
