"""
Play history domain.

Records plays in the play table and looks them up by track, artist or album.
"""

from .history import (
    Play,
    count_plays,
    get_play,
    get_plays_by_album,
    get_plays_by_artist,
    get_plays_by_track,
    get_recent_plays,
    insert_play,
    insert_track,
)

__all__ = [
    "Play",
    "count_plays",
    "get_play",
    "get_plays_by_album",
    "get_plays_by_artist",
    "get_plays_by_track",
    "get_recent_plays",
    "insert_play",
    "insert_track",
]
