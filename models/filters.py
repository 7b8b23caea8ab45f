"""
models/filters.py
-----------------
Query-shaping value objects passed to repository `get_all` calls.

Every predicate field defaults to None, meaning "do not filter on this
field". Range predicates are expressed as `*_start` / `*_end` pairs and only
apply when both ends are given.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from config import DEFAULT_PAGE_LIMIT


class OrderDirection(Enum):
    """Sort direction applied to a repository's fixed sort key."""
    ASC = "ASC"
    DESC = "DESC"


@dataclass(frozen=True)
class Filters:
    """
    Pagination and ordering shared by every entity filter.

    Attributes:
        limit: Maximum number of rows to return (must be > 0).
        offset: Number of rows to skip (must be >= 0).
        order_by: Direction applied to the entity's sort key.
    """
    limit: int = DEFAULT_PAGE_LIMIT
    offset: int = 0
    order_by: OrderDirection = OrderDirection.ASC


@dataclass(frozen=True)
class PatronFilters(Filters):
    id: Optional[UUID] = None
    member_id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    address: Optional[str] = None
    primary_phone: Optional[str] = None
    secondary_phone: Optional[str] = None
    email: Optional[str] = None
    enrollment_date_start: Optional[datetime] = None
    enrollment_date_end: Optional[datetime] = None
    last_update_date_start: Optional[datetime] = None
    last_update_date_end: Optional[datetime] = None
    last_update_by: Optional[str] = None
    last_update_by_id: Optional[UUID] = None


@dataclass(frozen=True)
class ScanFilters(Filters):
    """Filters for the scan ledger; retracted scans are never returned."""
    event_id: Optional[UUID] = None
    patron_id: Optional[UUID] = None
    service_id: Optional[UUID] = None
    plus_one: Optional[bool] = None
    scan_date_start: Optional[datetime] = None
    scan_date_end: Optional[datetime] = None
    scan_by_id: Optional[UUID] = None


@dataclass(frozen=True)
class EventFilters(Filters):
    id: Optional[UUID] = None
    name: Optional[str] = None
    start_date_start: Optional[datetime] = None
    start_date_end: Optional[datetime] = None
    last_update_by_id: Optional[UUID] = None


@dataclass(frozen=True)
class ServiceFilters(Filters):
    id: Optional[UUID] = None
    name: Optional[str] = None
    last_update_by_id: Optional[UUID] = None


@dataclass(frozen=True)
class AccountFilters(Filters):
    id: Optional[UUID] = None
    name: Optional[str] = None
    role: Optional[str] = None
