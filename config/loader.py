"""Configuration loading and normalization."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping

from dotenv import load_dotenv

from config.merge import env_overrides, merge_sections
from config.models import (
    Config,
    LetterboxdConfig,
    RadarrConfig,
    SyncLogConfig,
    TmdbConfig,
    WriteConfig,
)


def _as_users(value: Any) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        items = value.split(",")
    elif isinstance(value, list):
        items = [str(v) for v in value]
    else:
        items = [str(value)]
    return [item.strip() for item in items if item.strip()]


def _as_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
    return default


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_float(value: Any, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def config_from_dict(raw: Dict[str, Any]) -> Config:
    """Build a Config instance from a raw dictionary.

    Args:
        raw: Raw config dictionary.

    Returns:
        Normalized Config instance.
    """
    radarr_raw = raw.get("radarr", {}) or {}
    tmdb_raw = raw.get("tmdb", {}) or {}
    letterboxd_raw = raw.get("letterboxd", {}) or {}
    sync_log_raw = raw.get("sync_log", {}) or {}
    write_raw = raw.get("write", {}) or {}

    radarr = RadarrConfig(
        url=str(radarr_raw.get("url", "")).rstrip("/"),
        api_key=str(radarr_raw.get("api_key", "")),
        root_folder_path=str(radarr_raw.get("root_folder_path", "/movies")),
        quality_profile_id=_as_int(radarr_raw.get("quality_profile_id", 1), 1),
        monitored=_as_bool(radarr_raw.get("monitored"), True),
        search_on_add=_as_bool(radarr_raw.get("search_on_add"), True),
    )
    tmdb = TmdbConfig(
        api_key_env=str(tmdb_raw.get("api_key_env", "TMDB_API_KEY")),
        api_key=str(tmdb_raw.get("api_key", "")),
        language=str(tmdb_raw.get("language", "en-US")),
        request_delay_seconds=_as_float(tmdb_raw.get("request_delay_seconds", 0.0), 0.0),
        warn_below_similarity=_as_float(tmdb_raw.get("warn_below_similarity", 0.5), 0.5),
    )
    letterboxd = LetterboxdConfig(
        users=_as_users(letterboxd_raw.get("users")),
        page_delay_seconds=_as_float(letterboxd_raw.get("page_delay_seconds", 0.0), 0.0),
    )
    sync_log = SyncLogConfig(
        path=str(sync_log_raw.get("path", "sync-log.json")),
        environment=str(sync_log_raw.get("environment", "")),
        ci=_as_bool(sync_log_raw.get("ci"), False),
    )
    write = WriteConfig(dry_run=_as_bool(write_raw.get("dry_run"), False))
    return Config(
        radarr=radarr,
        tmdb=tmdb,
        letterboxd=letterboxd,
        sync_log=sync_log,
        write=write,
        log_level=str(raw.get("log_level", "INFO")),
    )


def load_config(path: Path | None, environ: Mapping[str, str] | None = None) -> Config:
    """Load config data into a Config instance.

    Values come from the JSON file at ``path`` (if given), overridden by
    environment variables. A ``.env`` file in the working directory is loaded
    first when reading the real process environment.

    Args:
        path: Optional path to a JSON config file.
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Parsed Config instance.
    """
    if environ is None:
        load_dotenv(Path.cwd() / ".env")
        environ = os.environ
    raw: Dict[str, Any] = {}
    if path is not None:
        raw = _load_json(path)
    raw = merge_sections(raw, env_overrides(environ))
    cfg = config_from_dict(raw)
    env_key = environ.get(cfg.tmdb.api_key_env)
    if env_key:
        cfg.tmdb.api_key = env_key
    return cfg


def validate_config(cfg: Config) -> List[str]:
    """Return human-readable problems that prevent a run."""
    problems: List[str] = []
    if not cfg.radarr.url:
        problems.append("Radarr URL missing. Set RADARR_URL or radarr.url in config.")
    if not cfg.radarr.api_key:
        problems.append("Radarr API key missing. Set RADARR_API_KEY or radarr.api_key in config.")
    if not cfg.tmdb.api_key:
        problems.append(
            f"TMDb API key missing. Set env var {cfg.tmdb.api_key_env} or add tmdb.api_key to config."
        )
    if not cfg.letterboxd.users:
        problems.append("No Letterboxd users configured. Set LETTERBOXD_USERS or letterboxd.users.")
    return problems
