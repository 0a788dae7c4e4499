"""
SQLite storage for play events.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from loguru import logger

from .config import get_data_dir

# Table plus lookup indexes, applied as one transaction. Every statement is
# guarded so re-running the script is a no-op.
SCHEMA = """
BEGIN;

CREATE TABLE IF NOT EXISTS play (
       id INTEGER PRIMARY KEY,
       time INTEGER NOT NULL,
       track_mbid VARCHAR(36),
       track_name TEXT,
       artist_mbid VARCHAR(36),
       artist_name TEXT,
       album_mbid VARCHAR(36),
       album_name TEXT
);

CREATE INDEX IF NOT EXISTS index_track_mbid ON play(track_mbid);
CREATE INDEX IF NOT EXISTS index_artist_mbid ON play(artist_mbid);
CREATE INDEX IF NOT EXISTS index_album_mbid ON play(album_mbid);

COMMIT;
"""

INDEX_NAMES = ("index_track_mbid", "index_artist_mbid", "index_album_mbid")


def get_database_path() -> Path:
    """Get the path to the SQLite database file."""
    return get_data_dir() / "plays.db"


@contextmanager
def get_db_connection(db_path: Optional[Path] = None) -> Iterator[sqlite3.Connection]:
    """Get a database connection with proper cleanup.

    Args:
        db_path: Database file (default: get_database_path()); ":memory:" is accepted
    """
    if db_path is None:
        db_path = get_database_path()
    conn = sqlite3.connect(db_path, timeout=30.0)
    conn.row_factory = sqlite3.Row  # Enable dict-like access

    try:
        yield conn
    finally:
        conn.close()


def init_database(conn: sqlite3.Connection) -> None:
    """Ensure the play table and its indexes exist.

    Safe to call any number of times. On failure the schema transaction is
    rolled back and the sqlite3 error is re-raised.
    """
    try:
        conn.executescript(SCHEMA)
    except sqlite3.Error:
        if conn.in_transaction:
            conn.rollback()
        raise
    logger.debug("Play schema ensured")


@contextmanager
def open_database(db_path: Optional[Path] = None) -> Iterator[sqlite3.Connection]:
    """Open the play database, creating the file and schema if needed."""
    if db_path is None:
        db_path = get_database_path()
    if str(db_path) != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    with get_db_connection(db_path) as conn:
        init_database(conn)
        logger.info(f"Opened play database: {db_path}")
        yield conn
