from collections import deque
from contextlib import contextmanager

import pytest


class RecordingDatabase:
    """In-memory stand-in for `db.connection.Database`.

    Records every statement and serves queued result sets to `query`.
    """

    def __init__(self):
        self.calls: list[tuple] = []
        self.results: deque = deque()
        self.rowcount = 1
        self.fail_with: Exception | None = None
        self.opened = 0
        self.released = 0
        self.conn = object()

    def queue(self, *result_sets):
        self.results.extend(result_sets)

    @contextmanager
    def connection(self):
        self.opened += 1
        try:
            yield self.conn
        finally:
            self.released += 1

    def execute(self, sql, params, conn=None):
        self.calls.append(("execute", sql, params, conn))
        if self.fail_with is not None:
            raise self.fail_with
        return self.rowcount

    def query(self, sql, params, conn=None):
        self.calls.append(("query", sql, params, conn))
        return list(self.results.popleft()) if self.results else []

    def query_one(self, sql, params, conn=None):
        rows = self.query(sql, params, conn)
        return rows[0] if rows else None

    def statements(self, kind):
        return [c for c in self.calls if c[0] == kind]


@pytest.fixture()
def fake_db() -> RecordingDatabase:
    return RecordingDatabase()
