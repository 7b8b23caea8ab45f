"""
models/scan.py
--------------
Domain model for check-in scans.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID


@dataclass
class Scan:
    """
    Represents one scan of a patron at an event.

    A scan without a service is the event check-in; a scan with a service
    records that the patron received it. Scans are never updated, only
    retracted.

    Attributes:
        event_id: Event the scan belongs to.
        patron_id: Patron that was scanned.
        service_id: Optional service delivered (None for the check-in).
        plus_one: Whether the patron brought a guest.
        scan_date: When the scan happened.
        scan_by_id: Account that performed the scan.
        scan_by: Display name of that account (read-only).
        deleted: Retraction flag.
    """
    event_id: UUID
    patron_id: UUID
    service_id: Optional[UUID] = None
    plus_one: bool = False
    scan_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    scan_by_id: Optional[UUID] = None
    scan_by: Optional[str] = None
    deleted: bool = False

    @property
    def key(self) -> tuple:
        return (self.event_id, self.patron_id, self.service_id)

    def is_check_in(self) -> bool:
        """Returns True if this scan is the event check-in."""
        return self.service_id is None
