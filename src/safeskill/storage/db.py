"""SQLite database connection management and schema migrations."""

from __future__ import annotations

import logging
from pathlib import Path

import aiosqlite

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER NOT NULL
);

CREATE TABLE IF NOT EXISTS scan_results (
    id TEXT PRIMARY KEY,
    target TEXT NOT NULL,
    skill_name TEXT NOT NULL,
    score INTEGER NOT NULL,
    rating TEXT NOT NULL,
    scanned_files INTEGER NOT NULL DEFAULT 0,
    scan_duration INTEGER NOT NULL DEFAULT 0,
    timestamp REAL NOT NULL
);

CREATE TABLE IF NOT EXISTS scan_findings (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    scan_id TEXT NOT NULL,
    rule_id TEXT NOT NULL,
    severity TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    plain_english TEXT NOT NULL DEFAULT '',
    file TEXT NOT NULL,
    line INTEGER,
    matched_content TEXT,
    recommendation TEXT NOT NULL DEFAULT '',
    FOREIGN KEY (scan_id) REFERENCES scan_results(id)
);

CREATE INDEX IF NOT EXISTS idx_findings_scan
    ON scan_findings(scan_id);
"""


async def get_db(db_path: str | Path) -> aiosqlite.Connection:
    """Open (or create) the database and run migrations."""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    db = await aiosqlite.connect(str(db_path))
    db.row_factory = aiosqlite.Row
    await db.execute("PRAGMA journal_mode=WAL")
    await db.execute("PRAGMA foreign_keys=ON")

    await _migrate(db)
    return db


async def _migrate(db: aiosqlite.Connection) -> None:
    """Create the schema on a fresh database."""
    cursor = await db.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    row = await cursor.fetchone()

    if row is None:
        await db.executescript(SCHEMA_SQL)
        await db.execute(
            "INSERT INTO schema_version (version) VALUES (?)",
            (SCHEMA_VERSION,),
        )
        await db.commit()
        logger.info("Database initialized at schema version %d", SCHEMA_VERSION)
        return

    cursor = await db.execute("SELECT version FROM schema_version")
    row = await cursor.fetchone()
    current = row[0] if row else 0
    if current > SCHEMA_VERSION:
        logger.warning(
            "Database schema version %d is newer than supported %d",
            current,
            SCHEMA_VERSION,
        )
