"""
Last.fm provider for lastfm-archiver.

Reads a user's scrobble history from the Last.fm web service (XML format).
"""

from .api import (
    API_ROOT,
    fetch_recent_tracks_page,
    iter_recent_track_pages,
    iter_recent_tracks,
)
from .exceptions import LastFMAPIError, LastFMError, ResponseParseError
from .models import Album, Artist, RecentTracksPage, Track
from .parser import parse_response

__all__ = [
    "API_ROOT",
    "fetch_recent_tracks_page",
    "iter_recent_track_pages",
    "iter_recent_tracks",
    "LastFMAPIError",
    "LastFMError",
    "ResponseParseError",
    "Album",
    "Artist",
    "RecentTracksPage",
    "Track",
    "parse_response",
]
