"""Last.fm-specific exceptions for error handling."""

from typing import Optional


class LastFMError(Exception):
    """Base exception for Last.fm operations."""

    pass


class ResponseParseError(LastFMError):
    """Raised when a response is not a well-formed recent tracks document."""

    pass


class LastFMAPIError(LastFMError):
    """Raised when Last.fm answers with status="failed"."""

    def __init__(self, message: str, code: Optional[int] = None):
        self.code = code
        super().__init__(message)
