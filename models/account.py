"""
models/account.py
-----------------
Domain model for staff accounts, the target of audit attribution.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

ROLES = ("Administrator", "Supervisor", "User")


@dataclass
class Account:
    """
    Represents a staff account.

    Attributes:
        name: Unique login / display name.
        role: One of ROLES.
        id: Identity (assigned at creation when None).
        creation_date: Set by the store on insert.
        last_update_date: Audit timestamp.
        last_update_by_id: Account that performed the last write.
        last_update_by: Display name of that account (read-only).
    """
    name: str
    role: str = "User"
    id: Optional[UUID] = None
    creation_date: Optional[datetime] = None
    last_update_date: Optional[datetime] = None
    last_update_by_id: Optional[UUID] = None
    last_update_by: Optional[str] = None
