"""TMDb session initialization and per-title resolution."""

from __future__ import annotations

import time
from dataclasses import dataclass

import requests

from config import Config
from logger import get_logger
from tmdb.client import MetadataMatch, title_similarity, tmdb_search_first_match

log = get_logger()


@dataclass
class TmdbContext:
    """TMDb session and search settings."""

    session: requests.Session
    api_key: str
    language: str
    delay: float
    warn_below_similarity: float


def init_tmdb(cfg: Config, session: requests.Session | None = None) -> TmdbContext:
    """Build the TMDb context for a run."""
    return TmdbContext(
        session=session or requests.Session(),
        api_key=cfg.tmdb.api_key,
        language=cfg.tmdb.language,
        delay=float(cfg.tmdb.request_delay_seconds),
        warn_below_similarity=float(cfg.tmdb.warn_below_similarity),
    )


def resolve_title(ctx: TmdbContext, query: str) -> MetadataMatch | None:
    """Resolve a cleaned title to its first TMDb search result.

    A weak title similarity between query and match is reported but does not
    change the outcome.
    """
    match = tmdb_search_first_match(ctx.session, ctx.api_key, query, ctx.language)
    if ctx.delay > 0:
        time.sleep(ctx.delay)
    if match is None:
        return None
    score = title_similarity(query, match.title)
    if score < ctx.warn_below_similarity:
        log.warn(f"  ⚠️ Weak TMDb match for '{query}': '{match.title}' (similarity {score:.2f})")
    else:
        log.debug(f"  TMDb: matched '{match.title}' ({match.year}) similarity {score:.2f}")
    return match
