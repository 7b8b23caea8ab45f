"""
query/builder.py
----------------
Turns a SELECT template plus a fixed, ordered list of optional predicates
into a parameterized statement for psycopg2.

Templates carry exactly one `/**where**/` marker. Values are only ever
bound through `%(name)s` placeholders.
"""

import re
from enum import Enum
from typing import Any, Optional

from errors import InvalidQueryBounds
from models.filters import Filters, OrderDirection

WHERE_MARKER = "/**where**/"


class Comparison(Enum):
    """How a predicate compares its column with its value."""
    EQUALS = "="
    BETWEEN = "BETWEEN"
    RAW = "RAW"


class QueryBuilder:
    """
    Accumulates WHERE clauses and bound parameters for one statement.

    Clauses are kept in call order, so calling the builder with the same
    filter always produces the same SQL text and parameter order.

    Example:
        builder = QueryBuilder("SELECT * FROM patrons p /**where**/")
        builder.equals("p.email", filters.email)
        builder.between("p.enrollmentdate", filters.enrollment_date_start, filters.enrollment_date_end)
        builder.page("p.lastname", filters)
        sql, params = builder.render()
    """

    def __init__(self, template: str):
        if template.count(WHERE_MARKER) != 1:
            raise ValueError(f"Template must contain exactly one {WHERE_MARKER} marker.")
        self.template = template
        self._clauses: list[str] = []
        self._params: dict[str, Any] = {}
        self._tail = ""

    # ── PREDICATES ────────────────────────────────────────

    def add_predicate(
        self, column: str, comparison: Comparison, value: Any, name: Optional[str] = None
    ) -> "QueryBuilder":
        """
        Append a predicate unless its value is unset.

        Args:
            column: Column expression, e.g. ``p.email``.
            comparison: Kind of comparison.
            value: Bound value; a ``(start, end)`` pair for BETWEEN; a
                truthy flag for RAW, in which case ``column`` is the fragment.
            name: Parameter name; derived from ``column`` when omitted.

        Returns:
            The builder, for chaining.
        """
        if comparison is Comparison.RAW:
            if value:
                self._clauses.append(column)
            return self

        if comparison is Comparison.BETWEEN:
            start, end = value if value is not None else (None, None)
            if start is None or end is None:
                return self
            base = name or _param_name(column)
            start_name = self._bind(f"{base}_start", start)
            end_name = self._bind(f"{base}_end", end)
            self._clauses.append(f"{column} BETWEEN %({start_name})s AND %({end_name})s")
            return self

        if value is None:
            return self
        param = self._bind(name or _param_name(column), value)
        self._clauses.append(f"{column} {comparison.value} %({param})s")
        return self

    def equals(self, column: str, value: Any, name: Optional[str] = None) -> "QueryBuilder":
        return self.add_predicate(column, Comparison.EQUALS, value, name)

    def between(
        self, column: str, start: Any, end: Any, name: Optional[str] = None
    ) -> "QueryBuilder":
        return self.add_predicate(column, Comparison.BETWEEN, (start, end), name)

    def where(self, fragment: str) -> "QueryBuilder":
        """Append a literal fragment such as ``s.deleted = FALSE``."""
        return self.add_predicate(fragment, Comparison.RAW, True)

    def add_parameters(self, **params: Any) -> "QueryBuilder":
        """Bind parameters referenced directly by the template."""
        for key, value in params.items():
            if key in self._params:
                raise ValueError(f"Parameter '{key}' is already bound.")
            self._params[key] = value
        return self

    # ── ORDERING & PAGINATION ─────────────────────────────

    def page(self, sort_key: str, filters: Filters) -> "QueryBuilder":
        """
        Append ORDER BY / LIMIT / OFFSET after the WHERE region.

        Raises:
            InvalidQueryBounds: If ``limit`` <= 0 or ``offset`` < 0.
        """
        if filters.limit is None or filters.limit <= 0:
            raise InvalidQueryBounds(f"limit must be positive, got {filters.limit}")
        if filters.offset is None or filters.offset < 0:
            raise InvalidQueryBounds(f"offset must not be negative, got {filters.offset}")
        direction = OrderDirection(filters.order_by).value
        limit = self._bind("limit", filters.limit)
        offset = self._bind("offset", filters.offset)
        self._tail = f"\nORDER BY {sort_key} {direction}\nLIMIT %({limit})s OFFSET %({offset})s"
        return self

    # ── RENDERING ─────────────────────────────────────────

    @property
    def clauses(self) -> list[str]:
        return list(self._clauses)

    def render(self) -> tuple[str, dict[str, Any]]:
        """
        Returns:
            The final SQL and a copy of the bound parameters.
        """
        where = f"WHERE {' AND '.join(self._clauses)}" if self._clauses else ""
        sql = self.template.replace(WHERE_MARKER, where).rstrip() + self._tail
        return sql, dict(self._params)

    def _bind(self, name: str, value: Any) -> str:
        """Register a value under a unique parameter name and return that name."""
        candidate, suffix = name, 2
        while candidate in self._params:
            candidate = f"{name}_{suffix}"
            suffix += 1
        self._params[candidate] = value
        return candidate


def _param_name(column: str) -> str:
    """Derive a placeholder name: ``p.lastupdatedate`` -> ``lastupdatedate``."""
    bare = column.rsplit(".", 1)[-1]
    cleaned = re.sub(r"\W+", "_", bare).strip("_").lower()
    return cleaned or "param"
