"""
errors.py
---------
Failures raised by the query and repository layers.

Store failures (psycopg2.OperationalError and friends) are not wrapped;
they reach the caller unchanged.
"""

from typing import Any, Optional


class RepositoryError(Exception):
    """
    Base class carrying enough context to log a failure meaningfully.

    Attributes:
        entity: Entity type involved (e.g. 'patron').
        operation: Repository operation that failed (e.g. 'get').
        key: Identifier or key tuple being addressed, if any.
    """

    def __init__(
        self,
        message: str,
        entity: Optional[str] = None,
        operation: Optional[str] = None,
        key: Any = None,
    ):
        super().__init__(message)
        self.entity = entity
        self.operation = operation
        self.key = key

    def __str__(self) -> str:
        context = [
            f"{label}={value}"
            for label, value in (("entity", self.entity), ("operation", self.operation), ("key", self.key))
            if value is not None
        ]
        message = super().__str__()
        return f"{message} ({', '.join(context)})" if context else message


class InvalidQueryBounds(RepositoryError):
    """A non-positive limit or a negative offset was supplied."""


class AmbiguousKey(RepositoryError):
    """More than one row matched a key that should be unique."""


class OperationNotSupported(RepositoryError):
    """The operation is not available for this entity (e.g. updating a scan)."""
