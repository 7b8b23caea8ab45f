"""Unit tests for db.connection.Database with a mocked psycopg2 pool."""

from unittest.mock import MagicMock

import psycopg2
import pytest

from config import DatabaseConfig
from db import connection as connection_module
from db.connection import Database


@pytest.fixture()
def pg_pool(monkeypatch):
    fake_pool = MagicMock()
    conn = MagicMock()
    fake_pool.getconn.return_value = conn
    factory = MagicMock(return_value=fake_pool)
    monkeypatch.setattr(connection_module.pool, "SimpleConnectionPool", factory)
    return factory, fake_pool, conn


@pytest.fixture()
def database(pg_pool) -> Database:
    db = Database(DatabaseConfig(url="postgresql://u:p@localhost/test", min_conn=2, max_conn=4))
    db.init_pool()
    return db


def _cursor(conn):
    return conn.cursor.return_value.__enter__.return_value


class TestPool:
    def test_uses_explicit_config(self, pg_pool, database):
        factory, _, _ = pg_pool
        factory.assert_called_once_with(2, 4, "postgresql://u:p@localhost/test")

    def test_init_is_idempotent(self, pg_pool, database):
        database.init_pool()
        assert pg_pool[0].call_count == 1

    def test_connection_before_init_raises(self):
        db = Database(DatabaseConfig(url="postgresql://localhost/none"))
        with pytest.raises(RuntimeError):
            with db.connection():
                pass

    def test_unreachable_store_propagates(self, monkeypatch):
        monkeypatch.setattr(
            connection_module.pool, "SimpleConnectionPool",
            MagicMock(side_effect=psycopg2.OperationalError("refused")),
        )
        with pytest.raises(psycopg2.OperationalError):
            Database(DatabaseConfig(url="postgresql://localhost/none")).init_pool()

    def test_close_pool(self, pg_pool, database):
        database.close_pool()
        pg_pool[1].closeall.assert_called_once()


class TestConnection:
    def test_released_after_error(self, pg_pool, database):
        _, fake_pool, conn = pg_pool
        with pytest.raises(ValueError):
            with database.connection():
                raise ValueError("boom")
        fake_pool.putconn.assert_called_once_with(conn)


class TestStatements:
    def test_execute_commits_and_returns_rowcount(self, pg_pool, database):
        _, fake_pool, conn = pg_pool
        _cursor(conn).rowcount = 3
        assert database.execute("DELETE FROM patrons", {}) == 3
        conn.commit.assert_called_once()
        fake_pool.putconn.assert_called_once_with(conn)

    def test_execute_rolls_back_and_reraises(self, pg_pool, database):
        _, fake_pool, conn = pg_pool
        _cursor(conn).execute.side_effect = psycopg2.OperationalError("gone")
        with pytest.raises(psycopg2.OperationalError):
            database.execute("DELETE FROM patrons", {})
        conn.rollback.assert_called_once()
        conn.commit.assert_not_called()
        fake_pool.putconn.assert_called_once_with(conn)

    def test_query_returns_dicts(self, pg_pool, database):
        _, _, conn = pg_pool
        _cursor(conn).fetchall.return_value = [{"id": 1}, {"id": 2}]
        assert database.query("SELECT id FROM patrons", {}) == [{"id": 1}, {"id": 2}]

    def test_query_one_absent(self, pg_pool, database):
        _, _, conn = pg_pool
        _cursor(conn).fetchone.return_value = None
        assert database.query_one("SELECT 1", {}) is None

    def test_supplied_connection_is_not_borrowed(self, pg_pool, database):
        _, fake_pool, _ = pg_pool
        own = MagicMock()
        database.query("SELECT 1", {}, conn=own)
        fake_pool.getconn.assert_not_called()
        own.cursor.assert_called_once()
