"""
Play history: recording plays and looking them up.

Rows live in the play table (see core.database). Nothing here commits; the
caller decides the transaction boundary.
"""

import sqlite3
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from lastfm_archiver.domain.lastfm.models import Track

_COLUMNS = (
    "id, time, track_mbid, track_name, artist_mbid, artist_name, "
    "album_mbid, album_name"
)


@dataclass(frozen=True)
class Play:
    """A single recorded play."""

    id: int
    time: int  # Unix seconds
    track_mbid: Optional[str] = None
    track_name: Optional[str] = None
    artist_mbid: Optional[str] = None
    artist_name: Optional[str] = None
    album_mbid: Optional[str] = None
    album_name: Optional[str] = None

    @property
    def played_at(self) -> datetime:
        return datetime.fromtimestamp(self.time, tz=timezone.utc)

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Play":
        return cls(
            id=row["id"],
            time=row["time"],
            track_mbid=row["track_mbid"],
            track_name=row["track_name"],
            artist_mbid=row["artist_mbid"],
            artist_name=row["artist_name"],
            album_mbid=row["album_mbid"],
            album_name=row["album_name"],
        )


def insert_play(
    conn: sqlite3.Connection,
    time: Optional[int],
    track_mbid: Optional[str] = None,
    track_name: Optional[str] = None,
    artist_mbid: Optional[str] = None,
    artist_name: Optional[str] = None,
    album_mbid: Optional[str] = None,
    album_name: Optional[str] = None,
    play_id: Optional[int] = None,
) -> int:
    """Insert one play.

    Args:
        conn: Open database connection
        time: Unix seconds of the play (required by the schema)
        play_id: Explicit row id (default: assigned by SQLite)

    Returns:
        The row id of the new play

    Raises:
        sqlite3.IntegrityError: If time is None or play_id already exists
    """
    cursor = conn.execute(
        f"""
        INSERT INTO play ({_COLUMNS})
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        (
            play_id,
            time,
            track_mbid,
            track_name,
            artist_mbid,
            artist_name,
            album_mbid,
            album_name,
        ),
    )
    return cursor.lastrowid


def insert_track(conn: sqlite3.Connection, track: Track) -> int:
    """Record a Last.fm scrobble as a play.

    Returns:
        The row id of the new play
    """
    return insert_play(
        conn,
        time=track.timestamp,
        track_mbid=track.mbid,
        track_name=track.name,
        artist_mbid=track.artist.mbid if track.artist else None,
        artist_name=track.artist.name if track.artist else None,
        album_mbid=track.album.mbid if track.album else None,
        album_name=track.album.name if track.album else None,
    )


def get_play(conn: sqlite3.Connection, play_id: int) -> Optional[Play]:
    row = conn.execute(
        f"SELECT {_COLUMNS} FROM play WHERE id = ?", (play_id,)
    ).fetchone()
    return Play.from_row(row) if row else None


# Lookup keys map to indexed columns only
_LOOKUP_COLUMNS = {
    "track": "track_mbid",
    "artist": "artist_mbid",
    "album": "album_mbid",
}


def _get_plays_by(conn: sqlite3.Connection, kind: str, mbid: str) -> list[Play]:
    column = _LOOKUP_COLUMNS[kind]
    cursor = conn.execute(
        f"SELECT {_COLUMNS} FROM play WHERE {column} = ? ORDER BY time, id",
        (mbid,),
    )
    plays = [Play.from_row(row) for row in cursor.fetchall()]
    logger.debug(f"Found {len(plays)} plays for {kind} {mbid}")
    return plays


def get_plays_by_track(conn: sqlite3.Connection, track_mbid: str) -> list[Play]:
    """Get every play of a track, oldest first."""
    return _get_plays_by(conn, "track", track_mbid)


def get_plays_by_artist(conn: sqlite3.Connection, artist_mbid: str) -> list[Play]:
    """Get every play of an artist, oldest first."""
    return _get_plays_by(conn, "artist", artist_mbid)


def get_plays_by_album(conn: sqlite3.Connection, album_mbid: str) -> list[Play]:
    """Get every play from an album, oldest first."""
    return _get_plays_by(conn, "album", album_mbid)


def get_recent_plays(
    conn: sqlite3.Connection, limit: int = 50, offset: int = 0
) -> list[Play]:
    """Get plays with pagination, newest first.

    Args:
        conn: Open database connection
        limit: Maximum number of plays to return
        offset: Number of plays to skip (for pagination)
    """
    cursor = conn.execute(
        f"SELECT {_COLUMNS} FROM play ORDER BY time DESC, id DESC LIMIT ? OFFSET ?",
        (limit, offset),
    )
    return [Play.from_row(row) for row in cursor.fetchall()]


def count_plays(conn: sqlite3.Connection) -> int:
    return conn.execute("SELECT COUNT(*) FROM play").fetchone()[0]
