"""
db/connection.py
----------------
Manages the PostgreSQL connection pool and parameterized statement execution.
Uses psycopg2's SimpleConnectionPool for efficient connection reuse.

A `Database` is built from an explicit `DatabaseConfig`; there is no
module-level pool.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

import psycopg2
from psycopg2 import pool, extras

from config import DatabaseConfig
from utils.logger import get_logger

logger = get_logger(__name__)

extras.register_uuid()


class Database:
    """
    Connection acquisition and statement execution against one PostgreSQL store.

    Every helper accepts an optional open connection so a caller can run a
    write and its read-back on the same connection; without one, a pooled
    connection is borrowed for the duration of the call.
    """

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self._pool: pool.SimpleConnectionPool | None = None

    # ── POOL ──────────────────────────────────────────────

    def init_pool(self) -> None:
        """
        Initialize the database connection pool.

        Raises:
            psycopg2.OperationalError: If the database is unreachable.
        """
        if self._pool is not None:
            return
        try:
            self._pool = pool.SimpleConnectionPool(
                self.config.min_conn, self.config.max_conn, self.config.url
            )
            logger.info("Database connection pool initialized successfully.")
        except psycopg2.OperationalError as e:
            logger.error(f"Failed to initialize database pool: {e}")
            raise

    def close_pool(self) -> None:
        """Close all connections in the pool."""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("Database connection pool closed.")

    @contextmanager
    def connection(self) -> Iterator[Any]:
        """
        Borrow a connection from the pool and return it on every exit path.

        Raises:
            RuntimeError: If the pool has not been initialized.
        """
        if self._pool is None:
            raise RuntimeError("Database pool not initialized. Call init_pool() first.")
        conn = self._pool.getconn()
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    # ── STATEMENTS ────────────────────────────────────────

    def execute(self, sql: str, params: Mapping[str, Any], conn=None) -> int:
        """
        Run a write statement and commit it. On failure the transaction is
        rolled back and the driver's exception propagates.

        Returns:
            The number of affected rows.
        """
        with self._borrow(conn) as c:
            try:
                with c.cursor() as cur:
                    cur.execute(sql, params)
                    affected = cur.rowcount
                c.commit()
                return affected
            except Exception:
                c.rollback()
                raise

    def query(self, sql: str, params: Mapping[str, Any], conn=None) -> list[dict]:
        """Run a read statement and return every row as a dict."""
        with self._borrow(conn) as c:
            with c.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                return [dict(row) for row in cur.fetchall()]

    def query_one(self, sql: str, params: Mapping[str, Any], conn=None) -> Optional[dict]:
        """Run a read statement and return the first row, or None."""
        with self._borrow(conn) as c:
            with c.cursor(cursor_factory=extras.RealDictCursor) as cur:
                cur.execute(sql, params)
                row = cur.fetchone()
                return dict(row) if row else None

    @contextmanager
    def _borrow(self, conn) -> Iterator[Any]:
        if conn is not None:
            yield conn
            return
        with self.connection() as c:
            yield c
