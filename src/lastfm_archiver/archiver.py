"""
Archive a Last.fm user's scrobbles into the play database.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests
from loguru import logger

from lastfm_archiver.core.config import Config
from lastfm_archiver.core.database import get_database_path, open_database
from lastfm_archiver.core.output import log
from lastfm_archiver.domain import lastfm
from lastfm_archiver.domain.plays import insert_track


@dataclass(frozen=True)
class ArchiveResult:
    """Summary of an archive run."""

    pages: int
    plays: int
    database: Path


def resolve_database_path(config: Config) -> Path:
    """Database path from config, or the default data directory location."""
    if config.database.path:
        return Path(config.database.path)
    return get_database_path()


def archive(
    config: Config, session: Optional[requests.Session] = None
) -> ArchiveResult:
    """Download every scrobble of the configured user into the database.

    Each page is committed once all of its tracks are inserted, so a failure
    part way through keeps the pages already stored.

    Args:
        config: Loaded configuration (api key and user must be set)
        session: Optional requests session

    Returns:
        ArchiveResult with page and play counts

    Raises:
        LastFMError: If Last.fm rejects a request or returns a malformed page
        requests.RequestException: On network or HTTP failures
        sqlite3.Error: On database failures
    """
    lastfm_config = config.lastfm
    db_path = resolve_database_path(config)

    pages = 0
    plays = 0

    with open_database(db_path) as conn:
        log(f"Archiving scrobbles for {lastfm_config.user} into {db_path}")
        for page in lastfm.iter_recent_track_pages(
            lastfm_config.api_key,
            lastfm_config.user,
            limit=lastfm_config.page_size,
            session=session,
            api_root=lastfm_config.api_root,
            timeout=lastfm_config.timeout,
        ):
            try:
                for track in page.tracks:
                    insert_track(conn, track)
                conn.commit()
            except Exception:
                conn.rollback()
                raise

            pages += 1
            plays += len(page.tracks)
            log(
                f"  → page {page.page}/{page.total_pages} (+{len(page.tracks)}, {plays} total)"
            )

    logger.info(f"Archive complete: {plays} plays from {pages} pages")
    return ArchiveResult(pages=pages, plays=plays, database=db_path)
