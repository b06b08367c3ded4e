"""Error taxonomy for a sort run.

Every error surfaces to the caller; the service layer decides whether a
failure aborts the batch or only excludes one track.
"""

from __future__ import annotations


class CoverSortError(Exception):
    """Base class for all errors raised by cover-sort."""


class NetworkError(CoverSortError):
    """Transport failure, timeout, rate limit or unexpected HTTP status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthError(CoverSortError):
    """The remote service rejected the supplied credentials."""


class ParseError(CoverSortError):
    """Response payload does not have the expected shape."""


class ImageDecodeError(CoverSortError):
    """Artwork bytes could not be decoded as an image."""


class DivideByZeroError(CoverSortError, ZeroDivisionError):
    """Artwork has zero pixels, so no average color exists."""


__all__ = [
    "CoverSortError",
    "NetworkError",
    "AuthError",
    "ParseError",
    "ImageDecodeError",
    "DivideByZeroError",
]
