"""
models/event.py
---------------
Domain models for events and the services offered at them.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID


@dataclass
class Event:
    """
    Represents an event patrons check in to.

    Attributes:
        name: Display name.
        start_date: When the event opens.
        end_date: When the event closes.
        id: Identity (assigned at creation when None).
        last_update_date: Audit timestamp.
        last_update_by_id: Account that performed the last write.
        last_update_by: Display name of that account (read-only).
    """
    name: str
    start_date: datetime
    end_date: datetime
    id: Optional[UUID] = None
    last_update_date: Optional[datetime] = None
    last_update_by_id: Optional[UUID] = None
    last_update_by: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.start_date:%Y-%m-%d} - {self.end_date:%Y-%m-%d})"


@dataclass
class Service:
    """A service that can be delivered to a patron at an event."""
    name: str
    description: Optional[str] = None
    id: Optional[UUID] = None
    last_update_date: Optional[datetime] = None
    last_update_by_id: Optional[UUID] = None
    last_update_by: Optional[str] = None
