"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class RadarrConfig:
    """Radarr connection and add-movie settings."""

    url: str = ""
    api_key: str = ""
    root_folder_path: str = "/movies"
    quality_profile_id: int = 1
    monitored: bool = True
    search_on_add: bool = True


@dataclass
class TmdbConfig:
    """TMDb configuration settings."""

    api_key_env: str = "TMDB_API_KEY"
    api_key: str = ""
    language: str = "en-US"
    request_delay_seconds: float = 0.0
    warn_below_similarity: float = 0.5


@dataclass
class LetterboxdConfig:
    """Watchlist scraping settings."""

    users: List[str] = field(default_factory=list)
    page_delay_seconds: float = 0.0


@dataclass
class SyncLogConfig:
    """Sync log file settings."""

    path: str = "sync-log.json"
    environment: str = ""
    ci: bool = False


@dataclass
class WriteConfig:
    """Radarr write settings."""

    dry_run: bool = False


@dataclass
class Config:
    """Top-level configuration container."""

    radarr: RadarrConfig
    tmdb: TmdbConfig
    letterboxd: LetterboxdConfig
    sync_log: SyncLogConfig
    write: WriteConfig
    log_level: str = "INFO"

    @property
    def suppress_sync_log(self) -> bool:
        """Whether sync log entries are suppressed (CI or test environments)."""
        env = self.sync_log.environment.strip().lower()
        return self.sync_log.ci or env in ("ci", "test")
