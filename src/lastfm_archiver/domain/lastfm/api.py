"""
Last.fm web service operations.

Fetches a user's scrobble history through user.getrecenttracks, one page at
a time. Page 1 holds the most recent scrobbles.
"""

from typing import Iterator, Optional

import requests
from loguru import logger

from lastfm_archiver import __version__
from lastfm_archiver.core.config import MAX_PAGE_SIZE

from . import parser
from .exceptions import ResponseParseError
from .models import RecentTracksPage, Track

# Last.fm API root
API_ROOT = "https://ws.audioscrobbler.com/2.0/"

USER_AGENT = f"lastfm-archiver/{__version__}"


def fetch_recent_tracks_page(
    api_key: str,
    user: str,
    page: int = 1,
    limit: int = MAX_PAGE_SIZE,
    session: Optional[requests.Session] = None,
    api_root: str = API_ROOT,
    timeout: float = 30.0,
) -> RecentTracksPage:
    """Fetch and parse one page of a user's recent tracks.

    Args:
        api_key: Last.fm API key
        user: Last.fm username
        page: 1-based page number
        limit: Scrobbles per page (max 200)
        session: Optional requests session (default: module-level requests)
        api_root: Web service root URL
        timeout: Request timeout in seconds

    Returns:
        Parsed page

    Raises:
        LastFMAPIError: If Last.fm rejected the call (bad key, unknown user, ...)
        ResponseParseError: If the body is not a recent tracks document
        requests.RequestException: On connection failures or non-2xx
            responses without a Last.fm error document
    """
    params = {
        "method": "user.getrecenttracks",
        "limit": limit,
        "user": user,
        "api_key": api_key,
        "page": page,
    }
    headers = {"User-Agent": USER_AGENT}

    http = session if session is not None else requests
    logger.debug(f"Requesting recent tracks page {page} for {user}")
    response = http.get(api_root, params=params, headers=headers, timeout=timeout)

    # Last.fm reports API errors as XML documents on 4xx responses, so parse
    # first and only fall back to the HTTP status when the body is unusable
    try:
        return parser.parse_response(response.content)
    except ResponseParseError:
        response.raise_for_status()
        raise


def iter_recent_track_pages(
    api_key: str,
    user: str,
    limit: int = MAX_PAGE_SIZE,
    session: Optional[requests.Session] = None,
    api_root: str = API_ROOT,
    timeout: float = 30.0,
) -> Iterator[RecentTracksPage]:
    """Yield every page of a user's recent tracks, starting at page 1.

    Pagination follows the page/totalPages attributes of each response and
    stops after the last page.
    """
    next_page: Optional[int] = 1
    while next_page is not None:
        page = fetch_recent_tracks_page(
            api_key,
            user,
            page=next_page,
            limit=limit,
            session=session,
            api_root=api_root,
            timeout=timeout,
        )
        logger.info(
            f"Fetched page {page.page}/{page.total_pages} ({len(page.tracks)} tracks)"
        )
        yield page
        next_page = page.next_page


def iter_recent_tracks(
    api_key: str,
    user: str,
    limit: int = MAX_PAGE_SIZE,
    session: Optional[requests.Session] = None,
    api_root: str = API_ROOT,
    timeout: float = 30.0,
) -> Iterator[Track]:
    """Yield every scrobble of a user, most recent first."""
    for page in iter_recent_track_pages(
        api_key,
        user,
        limit=limit,
        session=session,
        api_root=api_root,
        timeout=timeout,
    ):
        yield from page.tracks
