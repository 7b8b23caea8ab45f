"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from config import DatabaseConfig
from db.connection import Database
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Accounts table: staff accounts that create and modify records
CREATE TABLE IF NOT EXISTS accounts (
    id              UUID PRIMARY KEY,
    name            VARCHAR(256) UNIQUE NOT NULL,
    role            VARCHAR(20) NOT NULL DEFAULT 'User'
                    CHECK (role IN ('Administrator', 'Supervisor', 'User')),
    creationdate    TIMESTAMPTZ NOT NULL DEFAULT NOW(),
    lastupdatedate  TIMESTAMPTZ NOT NULL,
    lastupdatebyid  UUID
);

-- Patrons table: enrolled members
CREATE TABLE IF NOT EXISTS patrons (
    id              UUID PRIMARY KEY,
    memberid        INTEGER UNIQUE NOT NULL,
    firstname       VARCHAR(256) NOT NULL,
    lastname        VARCHAR(256) NOT NULL,
    address         VARCHAR(256),
    primaryphone    VARCHAR(15),
    secondaryphone  VARCHAR(15),
    email           VARCHAR(256),
    enrollmentdate  TIMESTAMPTZ NOT NULL,
    lastupdatedate  TIMESTAMPTZ NOT NULL,
    lastupdatebyid  UUID
);

-- Events table: occasions at which patrons check in
CREATE TABLE IF NOT EXISTS events (
    id              UUID PRIMARY KEY,
    name            VARCHAR(256) NOT NULL,
    startdate       TIMESTAMPTZ NOT NULL,
    enddate         TIMESTAMPTZ NOT NULL,
    lastupdatedate  TIMESTAMPTZ NOT NULL,
    lastupdatebyid  UUID
);

-- Services table: things a patron can receive at an event
CREATE TABLE IF NOT EXISTS services (
    id              UUID PRIMARY KEY,
    name            VARCHAR(256) UNIQUE NOT NULL,
    description     VARCHAR(256),
    lastupdatedate  TIMESTAMPTZ NOT NULL,
    lastupdatebyid  UUID
);

-- Scans table: append-only ledger of check-ins and service deliveries
CREATE TABLE IF NOT EXISTS scans (
    eventid         UUID NOT NULL,
    patronid        UUID NOT NULL,
    serviceid       UUID,
    plusone         BOOLEAN NOT NULL DEFAULT FALSE,
    scandate        TIMESTAMPTZ NOT NULL,
    scanbyid        UUID,
    deleted         BOOLEAN NOT NULL DEFAULT FALSE
);

-- One live scan per (event, patron, service); a NULL service is the check-in
CREATE UNIQUE INDEX IF NOT EXISTS idx_scans_key ON scans (
    eventid, patronid, COALESCE(serviceid, '00000000-0000-0000-0000-000000000000'::uuid)
) WHERE deleted = FALSE;
CREATE INDEX IF NOT EXISTS idx_scans_date ON scans(scandate);
CREATE INDEX IF NOT EXISTS idx_patrons_name ON patrons((firstname || lastname));
"""

DROP_SQL = """
DROP TABLE IF EXISTS scans;
DROP TABLE IF EXISTS services;
DROP TABLE IF EXISTS events;
DROP TABLE IF EXISTS patrons;
DROP TABLE IF EXISTS accounts;
"""


def create_tables(database: Database) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    _run_script(database, SCHEMA_SQL)
    logger.info("Database schema initialized successfully.")


def drop_tables(database: Database) -> None:
    """Drop every table created by `create_tables`."""
    _run_script(database, DROP_SQL)
    logger.info("Database schema dropped.")


def _run_script(database: Database, script: str) -> None:
    with database.connection() as conn:
        try:
            with conn.cursor() as cur:
                cur.execute(script)
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Failed to run schema script: {e}")
            raise


if __name__ == "__main__":
    db = Database(DatabaseConfig.from_env())
    db.init_pool()
    try:
        create_tables(db)
    finally:
        db.close_pool()
    print("Database schema created successfully.")
