"""
Last.fm domain models.

Scrobbles as returned by user.getrecenttracks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class Artist:
    name: str
    mbid: Optional[str] = None


@dataclass(frozen=True)
class Album:
    name: str
    mbid: Optional[str] = None


@dataclass(frozen=True)
class Track:
    """A single scrobble: a track and the moment it was played."""

    name: str
    time: datetime  # UTC
    mbid: Optional[str] = None
    artist: Optional[Artist] = None
    album: Optional[Album] = None

    @property
    def timestamp(self) -> int:
        """Scrobble time as Unix seconds."""
        return int(self.time.timestamp())


@dataclass(frozen=True)
class RecentTracksPage:
    """One page of a user's recent tracks."""

    page: int
    total_pages: int
    tracks: List[Track] = field(default_factory=list)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def next_page(self) -> Optional[int]:
        return self.page + 1 if self.has_next else None
