"""
Parsing of Last.fm XML responses.

A successful user.getrecenttracks document looks like:

    <lfm status="ok">
      <recenttracks user="..." page="1" perPage="200" totalPages="12" total="2345">
        <track nowplaying="true">...</track>
        <track>
          <artist mbid="...">Artist</artist>
          <name>Track</name>
          <mbid>...</mbid>
          <album mbid="...">Album</album>
          <date uts="1700000000">14 Nov 2023, 22:13</date>
        </track>
      </recenttracks>
    </lfm>

A failed call replaces <recenttracks> with <error code="N">message</error>.
"""

import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Optional

from .exceptions import LastFMAPIError, ResponseParseError
from .models import Album, Artist, RecentTracksPage, Track


def _require_child(element: ET.Element, tag: str) -> ET.Element:
    child = element.find(tag)
    if child is None:
        raise ResponseParseError(f"missing {tag}")
    return child


def _require_int_attribute(element: ET.Element, name: str) -> int:
    value = element.get(name)
    if value is None:
        raise ResponseParseError(f"missing {name}")
    try:
        return int(value)
    except ValueError:
        raise ResponseParseError(f"invalid {name}: {value!r}") from None


def _non_empty(value: Optional[str]) -> Optional[str]:
    """Last.fm sends unknown MBIDs as empty strings."""
    return value if value else None


def parse_track(element: ET.Element) -> Track:
    """Build a Track from a <track> element.

    Raises:
        ResponseParseError: If a required child or attribute is missing
    """
    artist_element = _require_child(element, "artist")
    artist = None
    if artist_element.text:
        artist = Artist(
            name=artist_element.text, mbid=_non_empty(artist_element.get("mbid"))
        )

    album_element = _require_child(element, "album")
    album = None
    if album_element.text:
        album = Album(
            name=album_element.text, mbid=_non_empty(album_element.get("mbid"))
        )

    mbid = _non_empty(_require_child(element, "mbid").text)

    name = _require_child(element, "name").text
    if not name:
        raise ResponseParseError("empty name")

    date_element = _require_child(element, "date")
    uts = _require_int_attribute(date_element, "uts")
    try:
        time = datetime.fromtimestamp(uts, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ResponseParseError(f"invalid uts: {uts}") from None

    return Track(
        name=name,
        time=time,
        mbid=mbid,
        artist=artist,
        album=album,
    )


def parse_recent_tracks(element: ET.Element) -> RecentTracksPage:
    """Build a RecentTracksPage from a <recenttracks> element.

    Tracks flagged nowplaying="true" are skipped: they have no scrobble date.
    """
    page = _require_int_attribute(element, "page")
    total_pages = _require_int_attribute(element, "totalPages")

    tracks = [
        parse_track(child)
        for child in element
        if child.get("nowplaying") != "true"
    ]

    return RecentTracksPage(page=page, total_pages=total_pages, tracks=tracks)


def parse_response(body: bytes) -> RecentTracksPage:
    """Parse a user.getrecenttracks response body.

    Args:
        body: Raw XML response

    Returns:
        The parsed page

    Raises:
        LastFMAPIError: If Last.fm reported status="failed"
        ResponseParseError: If the document is malformed
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise ResponseParseError(f"invalid XML: {e}") from e

    status = root.get("status")
    if status is None:
        raise ResponseParseError("missing status")

    if status == "ok":
        return parse_recent_tracks(_require_child(root, "recenttracks"))

    if status == "failed":
        error = root.find("error")
        if error is None:
            raise ResponseParseError("missing error")
        if not error.text:
            raise ResponseParseError("missing error message")
        code = error.get("code")
        raise LastFMAPIError(
            error.text.strip(), code=int(code) if code and code.isdigit() else None
        )

    raise ResponseParseError("unknown status")
