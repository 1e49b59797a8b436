"""Watchlist slug normalization helpers for TMDb searches."""

from __future__ import annotations

import re

_YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")
_SHORT_NUMBER_RE = re.compile(r"\b\d{1,2}\b")


def slug_to_title(slug: str) -> str:
    """Turn a Letterboxd film slug into a space-separated candidate title."""
    return slug.replace("-", " ")


def clean_title(raw: str) -> str:
    """Build a TMDb search query from a candidate title.

    Years (1900-2099) and standalone one or two digit numbers are removed,
    then whitespace is collapsed. Letterboxd disambiguates remakes with a year
    suffix (``the-thing-1982``) and duplicates with a counter
    (``crash-2``), neither of which helps a title search.

    Titles made only of such tokens (``1984``) come back empty.

    Args:
        raw: Candidate title, usually from ``slug_to_title``.

    Returns:
        Cleaned search query.
    """
    s = _YEAR_RE.sub(" ", raw)
    s = _SHORT_NUMBER_RE.sub(" ", s)
    return re.sub(r"\s+", " ", s).strip()


def title_key(title: str) -> str:
    """Key for case-insensitive exact title comparison."""
    return title.strip().casefold()


def build_title_index(titles) -> set[str]:
    """Index titles by ``title_key`` for library membership checks."""
    return {title_key(str(t)) for t in titles if t}
