"""
repositories/base.py
--------------------
Generic filter-driven repositories.

`Repository` covers entities addressed by a single `id`;
`CompositeKeyRepository` covers append-only entities addressed by a
2-3 part key, which can be created and read but never updated or deleted.

Concrete repositories declare their table, column list, SELECT template,
sort key, and the fixed order in which filter fields become predicates.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Callable, Generic, Optional, TypeVar
from uuid import UUID, uuid4

from db.connection import Database
from errors import AmbiguousKey, InvalidQueryBounds, OperationNotSupported, RepositoryError
from models.filters import Filters
from query.builder import QueryBuilder
from repositories.audit import AuditOverlay
from utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QueryRepository(ABC, Generic[T]):
    """Read side shared by both repository variants."""

    entity_name: str = "record"
    filters_type: type[Filters] = Filters
    sort_key: str = ""

    def __init__(self, database: Database, audit: Optional[AuditOverlay] = None):
        self.db = database
        self.audit = audit or AuditOverlay()

    # ── READ ──────────────────────────────────────────────

    def get_all(self, filters: Optional[Filters] = None) -> list[T]:
        """
        Retrieve every record matching the optional filters.

        Args:
            filters: Base `Filters` (pagination only) or the entity's own
                filter type. Unset fields do not filter.

        Returns:
            Records ordered by the entity's sort key, one page at most.

        Raises:
            InvalidQueryBounds: If the filter carries an invalid limit/offset.
        """
        return self._fetch(filters or self.filters_type())

    def _fetch(
        self,
        filters: Filters,
        conn=None,
        refine: Optional[Callable[[QueryBuilder], Any]] = None,
    ) -> list[T]:
        sql, params = self.build_query(filters, refine)
        rows = self.db.query(sql, params, conn=conn)
        return [self._row_to_entity(row) for row in rows]

    def build_query(
        self, filters: Filters, refine: Optional[Callable[[QueryBuilder], Any]] = None
    ) -> tuple[str, dict]:
        """Render the SELECT statement `get_all` would run for ``filters``."""
        builder = QueryBuilder(self._select_template())
        self.audit.bind(builder)
        self._apply_default_predicates(builder)
        if isinstance(filters, self.filters_type):
            self._apply_filters(builder, filters)
        if refine is not None:
            refine(builder)
        try:
            builder.page(self.sort_key, filters)
        except InvalidQueryBounds as e:
            e.entity, e.operation = self.entity_name, "get_all"
            logger.error(f"Rejected {self.entity_name} query: {e}")
            raise
        return builder.render()

    def _single(self, matches: list[T], key: Any) -> Optional[T]:
        if len(matches) > 1:
            logger.error(f"{len(matches)} {self.entity_name} rows matched key {key}")
            raise AmbiguousKey(
                f"More than one {self.entity_name} matched",
                entity=self.entity_name, operation="get", key=key,
            )
        return matches[0] if matches else None

    # ── HOOKS ─────────────────────────────────────────────

    def _apply_default_predicates(self, builder: QueryBuilder) -> None:
        """Predicates applied to every read, regardless of filters."""

    @abstractmethod
    def _select_template(self) -> str:
        """SELECT statement containing one /**where**/ marker."""

    @abstractmethod
    def _apply_filters(self, builder: QueryBuilder, filters: Filters) -> None:
        """Add the entity's predicates in their fixed declared order."""

    @abstractmethod
    def _row_to_entity(self, row: dict) -> T:
        """Convert a database row to a domain object."""


class Repository(QueryRepository[T]):
    """
    Repository for entities with a single `id` identity and an audit pair
    (`last_update_date`, `last_update_by_id`).
    """

    table: str = ""
    columns: tuple[str, ...] = ()

    # ── CREATE ────────────────────────────────────────────

    def create(self, entity: T) -> Optional[T]:
        """
        Insert a new record, assigning its id and audit timestamp.
        The caller's object is left untouched.

        Returns:
            The record as stored, read back on the same connection.
        """
        stamped = replace(entity, id=entity.id or uuid4(), last_update_date=utc_now())
        names = ", ".join(self.columns)
        values = ", ".join(f"%({c})s" for c in self.columns)
        sql = f"INSERT INTO {self.table} ({names}) VALUES ({values})"

        with self.db.connection() as conn:
            try:
                self.db.execute(sql, self._to_params(stamped), conn=conn)
            except Exception as e:
                logger.error(f"Failed to create {self.entity_name} {stamped.id}: {e}")
                raise
            created = self._get(stamped.id, conn)
        logger.info(f"Created {self.entity_name} {stamped.id}")
        return created

    # ── READ ──────────────────────────────────────────────

    def get(self, id: UUID) -> Optional[T]:
        """
        Fetch a single record by id.

        Returns:
            The record, or None if no row matches.

        Raises:
            AmbiguousKey: If more than one row matches.
        """
        return self._get(id)

    def _get(self, id: UUID, conn=None) -> Optional[T]:
        filters = self.filters_type(id=id, limit=2)
        return self._single(self._fetch(filters, conn=conn), key=id)

    # ── UPDATE ────────────────────────────────────────────

    def update(self, entity: T) -> Optional[T]:
        """
        Overwrite an existing record and re-stamp its audit timestamp.
        Concurrent updates are last-write-wins. The caller's object is left
        untouched.

        Returns:
            The record as stored, or None if no row has the entity's id.
        """
        stamped = replace(entity, last_update_date=utc_now())
        assignments = ", ".join(f"{c} = %({c})s" for c in self.columns if c != "id")
        sql = f"UPDATE {self.table} SET {assignments} WHERE id = %(id)s"

        with self.db.connection() as conn:
            try:
                self.db.execute(sql, self._to_params(stamped), conn=conn)
            except Exception as e:
                logger.error(f"Failed to update {self.entity_name} {entity.id}: {e}")
                raise
            updated = self._get(entity.id, conn)
        logger.info(f"Updated {self.entity_name} {entity.id}")
        return updated

    # ── DELETE ────────────────────────────────────────────

    def delete(self, id: UUID) -> None:
        """Delete a record by id. Deleting a missing id is a no-op."""
        sql = f"DELETE FROM {self.table} WHERE id = %(id)s"
        try:
            deleted = self.db.execute(sql, {"id": id})
        except Exception as e:
            logger.error(f"Failed to delete {self.entity_name} {id}: {e}")
            raise
        if deleted:
            logger.info(f"Deleted {self.entity_name} {id}")

    # ── HOOKS ─────────────────────────────────────────────

    @abstractmethod
    def _to_params(self, entity: T) -> dict:
        """Map an entity to a dict keyed by every name in `columns`."""


class CompositeKeyRepository(QueryRepository[T]):
    """
    Repository for append-only entities keyed by several identifiers.

    `key_fields` names the filter fields forming the key, in order; the
    first `required_key_parts` must always be supplied. An omitted or None
    optional part matches any value.
    """

    key_fields: tuple[str, ...] = ()
    required_key_parts: int = 2

    @abstractmethod
    def create(self, entity: T) -> Optional[T]:
        """Insert a new record and return it as stored."""

    def get(self, *key_parts: Any) -> Optional[T]:
        """
        Fetch the single live record matching the key parts.

        Raises:
            AmbiguousKey: If more than one row matches, which can happen
                when an optional key part is left unset.
            RepositoryError: If a required key part is None.
        """
        if not self.required_key_parts <= len(key_parts) <= len(self.key_fields):
            raise TypeError(
                f"{self.entity_name} key takes {self.required_key_parts} to "
                f"{len(self.key_fields)} parts, got {len(key_parts)}"
            )
        missing = [
            name for name, part in zip(self.key_fields, key_parts[:self.required_key_parts])
            if part is None
        ]
        if missing:
            raise RepositoryError(
                f"Required key parts missing: {', '.join(missing)}",
                entity=self.entity_name, operation="get", key=key_parts,
            )
        filters = self.filters_type(limit=2, **dict(zip(self.key_fields, key_parts)))
        return self._single(self._fetch(filters), key=key_parts)

    def update(self, entity: T) -> T:
        raise OperationNotSupported(
            f"{self.entity_name} records may not be updated",
            entity=self.entity_name, operation="update",
        )

    def delete(self, *key_parts: Any) -> None:
        raise OperationNotSupported(
            f"{self.entity_name} records may not be deleted",
            entity=self.entity_name, operation="delete", key=key_parts or None,
        )
