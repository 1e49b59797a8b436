"""Main execution pipeline for syncing watchlists into Radarr."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

import requests

from cli import RunOptions
from config import Config
from core.matching import build_title_index, clean_title, title_key
from core.services.sync_log import SyncLog
from core.services.tmdb_resolver import TmdbContext, init_tmdb, resolve_title
from letterboxd.scraper import create_scraper, fetch_watchlist
from logger import get_logger
from radarr.client import RadarrClient, RegistryRecord

log = get_logger()

STATUSES = ("added", "exists", "in_library", "not_found", "failed", "dry_run")


@dataclass
class RunContext:
    """Resolved configuration and clients for a run."""

    cfg: Config
    users: list[str]
    dry_run: bool
    scraper_session: requests.Session
    tmdb_ctx: TmdbContext
    radarr: RadarrClient
    sync_log: SyncLog
    library_titles: set[str] = field(default_factory=set)
    library_ids: set[int] = field(default_factory=set)


@dataclass
class ProcessResult:
    """Per-title processing result."""

    status: str


@dataclass
class RunSummary:
    """Aggregate results for a run."""

    counts: Dict[str, int] = field(default_factory=lambda: {status: 0 for status in STATUSES})

    def record(self, result: ProcessResult) -> None:
        self.counts[result.status] = self.counts.get(result.status, 0) + 1


def build_radarr_client(cfg: Config, session: requests.Session | None = None) -> RadarrClient:
    """Create a Radarr client from config."""
    return RadarrClient(
        session=session or requests.Session(),
        base_url=cfg.radarr.url,
        api_key=cfg.radarr.api_key,
        root_folder_path=cfg.radarr.root_folder_path,
        quality_profile_id=cfg.radarr.quality_profile_id,
        monitored=cfg.radarr.monitored,
        search_on_add=cfg.radarr.search_on_add,
    )


def prepare_run_context(
    options: RunOptions,
    cfg: Config,
    *,
    scraper_session: requests.Session | None = None,
    tmdb_session: requests.Session | None = None,
    radarr: RadarrClient | None = None,
    sync_log: SyncLog | None = None,
) -> RunContext:
    """Resolve options against config and build the run's clients."""
    users = list(options.users) or list(cfg.letterboxd.users)
    dry_run = bool(options.dry_run or cfg.write.dry_run)
    if sync_log is None:
        log_path = options.log_path or Path(cfg.sync_log.path).expanduser()
        sync_log = SyncLog(log_path, enabled=not cfg.suppress_sync_log)
    return RunContext(
        cfg=cfg,
        users=users,
        dry_run=dry_run,
        scraper_session=scraper_session or create_scraper(),
        tmdb_ctx=init_tmdb(cfg, tmdb_session),
        radarr=radarr or build_radarr_client(cfg),
        sync_log=sync_log,
    )


def load_library(ctx: RunContext) -> list[RegistryRecord]:
    """Snapshot the Radarr library once for the whole run."""
    records = ctx.radarr.list_movies()
    ctx.library_titles = build_title_index(r.title for r in records)
    ctx.library_ids = {r.tmdb_id for r in records if r.tmdb_id is not None}
    log.info(f"Radarr library: {len(records)} movie(s).")
    return records


def process_title(raw_title: str, idx: int, total: int, ctx: RunContext) -> ProcessResult:
    """Resolve one watchlist title and register it with Radarr if needed."""
    if title_key(raw_title) in ctx.library_titles:
        log.debug(f"[{idx}/{total}] {raw_title}: already in Radarr")
        return ProcessResult(status="in_library")

    query = clean_title(raw_title)
    match = resolve_title(ctx.tmdb_ctx, query)
    if match is None:
        log.warn(f"[{idx}/{total}] ❌ Not found on TMDb: {raw_title}")
        ctx.sync_log.record_not_found(raw_title, query)
        return ProcessResult(status="not_found")

    if match.id in ctx.library_ids:
        log.info(f"[{idx}/{total}] 🔁 Already in Radarr: {match.title}")
        return ProcessResult(status="in_library")

    if ctx.dry_run:
        log.info(f"[{idx}/{total}] Would add: {match.title} ({match.year or 'n/a'})")
        return ProcessResult(status="dry_run")

    result = ctx.radarr.add_movie(match)
    if result.status == "added":
        log.info(f"[{idx}/{total}] ✅ Added: {match.title}")
    elif result.status == "exists":
        log.debug(f"[{idx}/{total}] {match.title}: Radarr reports it already exists")
    else:
        log.error(f"[{idx}/{total}] Failed to add {match.title}: HTTP {result.http_status}")
        ctx.sync_log.record_failure(match.title, match.id, result.http_status, result.error)
    return ProcessResult(status=result.status)


def sync_user(username: str, ctx: RunContext, summary: RunSummary) -> None:
    """Scrape one user's watchlist and process every title in order."""
    log.info(f"\nFetching watchlist for {username}...")
    titles = fetch_watchlist(ctx.scraper_session, username, delay=ctx.cfg.letterboxd.page_delay_seconds)
    log.info(f"Found {len(titles)} title(s).")
    for idx, raw_title in enumerate(titles, 1):
        summary.record(process_title(raw_title, idx, len(titles), ctx))


def finalize_run(summary: RunSummary, ctx: RunContext) -> int:
    """Log final summary and return exit code."""
    counts = summary.counts
    log.info("\nDone.")
    log.info(f"  Added:             {counts['added']}")
    log.info(f"  Already in Radarr: {counts['in_library'] + counts['exists']}")
    log.info(f"  Not found on TMDb: {counts['not_found']}")
    log.info(f"  Failed:            {counts['failed']}")
    if ctx.dry_run:
        log.info(f"  (dry_run=true — {counts['dry_run']} movie(s) would have been added)")
    if not ctx.sync_log.enabled:
        log.info("  (CI environment — sync log entries suppressed)")
    elif ctx.sync_log.path is not None:
        log.info(f"  Sync log: {ctx.sync_log.path}")
    return 0


def run(
    options: RunOptions,
    cfg: Config,
    *,
    scraper_session: requests.Session | None = None,
    tmdb_session: requests.Session | None = None,
    radarr: RadarrClient | None = None,
    sync_log: SyncLog | None = None,
) -> int:
    """Execute a watchlist sync based on options and config.

    Args:
        options: Parsed run options.
        cfg: Loaded configuration.
        scraper_session: Session used for Letterboxd pages.
        tmdb_session: Session used for TMDb searches.
        radarr: Radarr client.
        sync_log: Sync log; built from config when omitted.

    Returns:
        Process exit code.

    Raises:
        SyncError: On transport failures (Letterboxd, TMDb, Radarr) and when
            the Radarr library cannot be listed. HTTP error pages from
            Letterboxd or TMDb are logged and skipped.
    """
    ctx = prepare_run_context(
        options,
        cfg,
        scraper_session=scraper_session,
        tmdb_session=tmdb_session,
        radarr=radarr,
        sync_log=sync_log,
    )
    ctx.sync_log.reset()
    if ctx.dry_run:
        log.info("DRY RUN enabled: nothing will be added to Radarr.\n")

    load_library(ctx)
    summary = RunSummary()
    for username in ctx.users:
        sync_user(username, ctx, summary)
    return finalize_run(summary, ctx)
