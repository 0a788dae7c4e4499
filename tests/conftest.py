"""Shared fixtures for lastfm-archiver tests."""

from pathlib import Path
from typing import Callable, Iterator, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from lastfm_archiver.core.database import open_database


@pytest.fixture(autouse=True)
def isolated_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG directories and the working directory at a temp dir."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("LASTFM_API_KEY", raising=False)
    monkeypatch.delenv("LASTFM_USER", raising=False)
    monkeypatch.delenv("LASTFM_ARCHIVER_DATABASE", raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def play_db(tmp_path: Path) -> Iterator:
    """Open a fresh play database with the schema applied."""
    with open_database(tmp_path / "plays.db") as conn:
        yield conn


def track_xml(
    name: str = "Song A",
    uts: int = 1700000000,
    mbid: str = "",
    artist: str = "Artist X",
    artist_mbid: str = "",
    album: str = "",
    album_mbid: str = "",
    nowplaying: bool = False,
) -> str:
    """Build a <track> element the way user.getrecenttracks returns it."""
    attrs = ' nowplaying="true"' if nowplaying else ""
    date = "" if nowplaying else f'<date uts="{uts}">14 Nov 2023, 22:13</date>'
    return (
        f"<track{attrs}>"
        f'<artist mbid="{artist_mbid}">{artist}</artist>'
        f"<name>{name}</name>"
        f"<streamable>0</streamable>"
        f"<mbid>{mbid}</mbid>"
        f'<album mbid="{album_mbid}">{album}</album>'
        f"<url>https://www.last.fm/music/x</url>"
        f"{date}"
        f"</track>"
    )


def recent_tracks_xml(
    tracks: List[str], page: int = 1, total_pages: int = 1
) -> bytes:
    """Wrap <track> elements in a successful recent tracks document."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<lfm status="ok">'
        f'<recenttracks user="someone" page="{page}" perPage="200" '
        f'totalPages="{total_pages}" total="{len(tracks)}">'
        + "".join(tracks)
        + "</recenttracks></lfm>"
    ).encode("utf-8")


def error_xml(code: int, message: str) -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<lfm status="failed"><error code="{code}">{message}</error></lfm>'
    ).encode("utf-8")


def mock_response(body: bytes, status_code: int = 200) -> MagicMock:
    """Build a requests.Response stand-in."""
    response = MagicMock()
    response.content = body
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error", response=response
        )
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def make_session() -> Callable[..., MagicMock]:
    """Build a mock requests session returning the given bodies in order."""

    def _make(*bodies: bytes, status_code: Optional[int] = None) -> MagicMock:
        session = MagicMock()
        session.get.side_effect = [
            mock_response(body, status_code or 200) for body in bodies
        ]
        return session

    return _make
