"""
models/patron.py
----------------
Domain model for enrolled members.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Patron:
    """
    Represents an enrolled member.

    Attributes:
        member_id: Externally issued membership number.
        first_name: Given name.
        last_name: Family name.
        enrollment_date: When the patron enrolled.
        address: Optional postal address.
        primary_phone: Optional primary contact number.
        secondary_phone: Optional secondary contact number.
        email: Optional e-mail address.
        id: Identity (assigned at creation when None).
        last_update_date: Audit timestamp, stamped on every write.
        last_update_by_id: Account that performed the last write.
        last_update_by: Display name of that account (read-only).
    """
    member_id: int
    first_name: str
    last_name: str
    enrollment_date: datetime
    address: Optional[str] = None
    primary_phone: Optional[str] = None
    secondary_phone: Optional[str] = None
    email: Optional[str] = None
    id: Optional[UUID] = None
    last_update_date: Optional[datetime] = None
    last_update_by_id: Optional[UUID] = None
    last_update_by: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"#{self.member_id} {self.full_name}"
