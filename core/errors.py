"""Exceptions raised by the sync pipeline's network clients."""

from __future__ import annotations


class SyncError(Exception):
    """Base class for failures that abort a sync run."""

    def __init__(self, message: str, url: str = "", status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ScrapeError(SyncError):
    """A Letterboxd watchlist page could not be fetched."""


class TmdbError(SyncError):
    """A TMDb search request failed."""


class RadarrError(SyncError):
    """A Radarr request failed at the transport level."""
