"""Radarr v3 API client."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

import requests

from core.errors import RadarrError
from logger import get_logger
from tmdb.client import MetadataMatch

log = get_logger()

MOVIE_EXISTS_CODE = "MovieExistsValidator"


@dataclass(frozen=True)
class RegistryRecord:
    """A movie already tracked by Radarr."""

    title: str
    tmdb_id: int | None


@dataclass
class AddResult:
    """Outcome of an add-movie request.

    ``status`` is one of ``added``, ``exists`` or ``failed``.
    """

    status: str
    http_status: int | None = None
    error: Any = None


def _parse_body(resp: requests.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return resp.text


def is_movie_exists_error(body: Any) -> bool:
    """Whether a failed add response says the movie is already in Radarr."""
    if not isinstance(body, list):
        return False
    for entry in body:
        if isinstance(entry, dict) and entry.get("errorCode") == MOVIE_EXISTS_CODE:
            return True
    return False


class RadarrClient:
    """Lists and adds movies through the Radarr API."""

    def __init__(
        self,
        session: requests.Session,
        base_url: str,
        api_key: str,
        root_folder_path: str,
        quality_profile_id: int = 1,
        monitored: bool = True,
        search_on_add: bool = True,
    ) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.root_folder_path = root_folder_path
        self.quality_profile_id = quality_profile_id
        self.monitored = monitored
        self.search_on_add = search_on_add

    @property
    def movie_url(self) -> str:
        return f"{self.base_url}/api/v3/movie"

    def _headers(self) -> Dict[str, str]:
        return {"X-Api-Key": self.api_key}

    def list_movies(self) -> List[RegistryRecord]:
        """Fetch every movie currently in the library.

        Returns an empty list when the body is not a JSON array.

        Raises:
            RadarrError: On transport failures or non-2xx responses.
        """
        url = self.movie_url
        try:
            resp = self.session.get(url, headers=self._headers(), timeout=30)
        except requests.RequestException as exc:
            raise RadarrError(f"Radarr request failed: {exc}", url=url) from exc
        if not 200 <= resp.status_code < 300:
            raise RadarrError(f"Radarr returned HTTP {resp.status_code} for {url}", url=url, status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            log.warn("⚠️ Could not parse Radarr movie list; treating library as empty.")
            return []
        if not isinstance(data, list):
            log.warn("⚠️ Unexpected Radarr movie list payload; treating library as empty.")
            return []

        records: List[RegistryRecord] = []
        for movie in data:
            if not isinstance(movie, dict):
                continue
            tmdb_id = movie.get("tmdbId")
            records.append(
                RegistryRecord(
                    title=str(movie.get("title") or ""),
                    tmdb_id=int(tmdb_id) if isinstance(tmdb_id, int) else None,
                )
            )
        return records

    def build_payload(self, match: MetadataMatch) -> Dict[str, Any]:
        """Build the add-movie request body for a TMDb match."""
        payload: Dict[str, Any] = {
            "title": match.title,
            "tmdbId": match.id,
            "qualityProfileId": self.quality_profile_id,
            "rootFolderPath": self.root_folder_path,
            "monitored": self.monitored,
            "addOptions": {"searchForMovie": self.search_on_add},
        }
        year = match.year
        if year:
            payload["year"] = year
        return payload

    def add_movie(self, match: MetadataMatch) -> AddResult:
        """Register a movie with Radarr.

        Raises:
            RadarrError: On transport failures. HTTP errors are returned as a
                ``failed`` AddResult instead.
        """
        url = self.movie_url
        try:
            resp = self.session.post(url, json=self.build_payload(match), headers=self._headers(), timeout=30)
        except requests.RequestException as exc:
            raise RadarrError(f"Radarr request failed: {exc}", url=url) from exc
        if 200 <= resp.status_code < 300:
            return AddResult(status="added", http_status=resp.status_code)
        body = _parse_body(resp)
        if is_movie_exists_error(body):
            return AddResult(status="exists", http_status=resp.status_code)
        return AddResult(status="failed", http_status=resp.status_code, error=body)
