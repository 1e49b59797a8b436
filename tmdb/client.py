"""TMDb API client and title similarity helpers."""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Any, Dict

import requests
from rapidfuzz import fuzz

from core.errors import TmdbError
from logger import get_logger

log = get_logger()


TMDB_BASE = "https://api.themoviedb.org/3"


@dataclass(frozen=True)
class MetadataMatch:
    """A TMDb movie search result."""

    id: int
    title: str
    release_date: str | None = None

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "MetadataMatch":
        return cls(
            id=int(result["id"]),
            title=str(result.get("title") or result.get("original_title") or ""),
            release_date=result.get("release_date") or None,
        )

    @property
    def year(self) -> int | None:
        """Release year parsed from ``release_date``, if present."""
        if not self.release_date:
            return None
        m = re.match(r"^(\d{4})", self.release_date)
        if not m:
            return None
        return int(m.group(1))


def tmdb_request(session: requests.Session, api_key: str, endpoint: str, params: Dict[str, Any]) -> Dict[str, Any]:
    """Make a TMDb API request.

    Args:
        session: Requests session.
        api_key: TMDb API key.
        endpoint: API endpoint path.
        params: Query parameters.

    Returns:
        Parsed JSON response.

    Raises:
        TmdbError: On transport failures, non-2xx responses or invalid JSON.
    """
    url = f"{TMDB_BASE}{endpoint}"
    params = dict(params)
    params["api_key"] = api_key
    try:
        resp = session.get(url, params=params, timeout=20)
        resp.raise_for_status()
        return resp.json()
    except requests.HTTPError as exc:
        status = exc.response.status_code if exc.response is not None else None
        raise TmdbError(f"TMDb request failed ({status}): {endpoint}", url=url, status=status) from exc
    except requests.RequestException as exc:
        raise TmdbError(f"TMDb request failed: {exc}", url=url) from exc
    except ValueError as exc:
        raise TmdbError(f"TMDb returned invalid JSON: {endpoint}", url=url) from exc


def normalize_title(title: str) -> str:
    """Normalize a title for fuzzy comparison.

    Args:
        title: Title to normalize.

    Returns:
        Normalized title string.
    """
    lowered = title.lower()
    lowered = unicodedata.normalize("NFKD", lowered)
    lowered = "".join(ch for ch in lowered if not unicodedata.combining(ch))
    lowered = lowered.replace("&", "and")
    lowered = re.sub(r"[^a-z0-9]+", " ", lowered)
    return re.sub(r"\s+", " ", lowered).strip()


def title_similarity(left: str, right: str) -> float:
    """Compute a fuzzy similarity score between two titles.

    Args:
        left: First title.
        right: Second title.

    Returns:
        Similarity score in [0, 1].
    """
    if not left or not right:
        return 0.0
    return fuzz.QRatio(normalize_title(left), normalize_title(right)) / 100.0


def tmdb_search_first_match(
    session: requests.Session,
    api_key: str,
    title: str,
    language: str = "en-US",
) -> MetadataMatch | None:
    """Search TMDb for a movie and return the first result.

    The first result is taken as-is; there is no re-query or scoring. An
    error response (rate limit, bad key, server error) counts as no match so
    the caller can log it and move on.

    Args:
        session: Requests session.
        api_key: TMDb API key.
        title: Cleaned search query.
        language: Language code.

    Returns:
        First matching result, or None when the search returns nothing.

    Raises:
        TmdbError: On transport failures.
    """
    if not title:
        return None
    try:
        data = tmdb_request(session, api_key, "/search/movie", {"query": title, "language": language})
    except TmdbError as exc:
        if exc.status is None:
            raise
        log.warn(f"  ⚠️ TMDb search for '{title}' returned HTTP {exc.status}")
        return None
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results:
        return None
    return MetadataMatch.from_result(results[0])
