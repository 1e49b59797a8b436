"""Per-run JSON log of titles missing on TMDb and failed Radarr adds."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from logger import get_logger

log = get_logger()

NOT_FOUND = "notFoundOnTmdb"
FAILURES = "radarrFailures"
SECTIONS = (NOT_FOUND, FAILURES)


def empty_log() -> Dict[str, Any]:
    """Return a fresh log structure stamped with the current time."""
    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        NOT_FOUND: [],
        FAILURES: [],
    }


class SyncLog:
    """File-backed record of a single run's exceptions.

    Every append re-reads and rewrites the whole file. I/O errors are reported
    as warnings and never raised. With ``path=None`` entries are kept only in
    ``self.data``.
    """

    def __init__(self, path: Path | None, enabled: bool = True) -> None:
        self.path = path
        self.enabled = enabled
        self.data: Dict[str, Any] = empty_log()
        self.not_found_count = 0
        self.failure_count = 0

    def reset(self) -> None:
        """Start a new log, overwriting any previous run's file."""
        self.data = empty_log()
        self.not_found_count = 0
        self.failure_count = 0
        self._write(self.data)

    def append(self, section: str, entry: Any) -> None:
        """Add an entry to ``section`` and persist the log."""
        if section not in SECTIONS:
            raise ValueError(f"Unknown sync log section: {section}")
        if not self.enabled:
            return
        data = self._read()
        entries = data.get(section)
        if not isinstance(entries, list):
            entries = []
            data[section] = entries
        entries.append(entry)
        self.data = data
        if section == NOT_FOUND:
            self.not_found_count += 1
        else:
            self.failure_count += 1
        self._write(data)

    def record_not_found(self, raw_title: str, cleaned_title: str) -> None:
        self.append(NOT_FOUND, f"{raw_title} (searched: {cleaned_title})")

    def record_failure(self, title: str, tmdb_id: int, status: int | None, error: Any) -> None:
        self.append(FAILURES, {"title": title, "tmdbId": tmdb_id, "status": status, "error": error})

    def entries(self, section: str) -> List[Any]:
        return list(self.data.get(section) or [])

    def _read(self) -> Dict[str, Any]:
        if self.path is None:
            return self.data
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            log.warn(f"⚠️ Could not read sync log {self.path}: {exc}")
            return empty_log()
        if not isinstance(data, dict):
            return empty_log()
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as exc:
            log.warn(f"⚠️ Could not write sync log {self.path}: {exc}")
