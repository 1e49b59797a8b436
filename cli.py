"""Command-line parsing helpers."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable


@dataclass
class RunOptions:
    """Parsed CLI options used by the sync pipeline."""

    config_path: Path | None
    users: list[str] = field(default_factory=list)
    dry_run: bool = False
    log_path: Path | None = None
    log_level: str | None = None


def _parse_run_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for a sync run.

    Args:
        argv: Optional argument list.

    Returns:
        Parsed argparse namespace.
    """
    parser = argparse.ArgumentParser(description="Sync Letterboxd watchlists into Radarr.")
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument(
        "--user",
        action="append",
        help="Letterboxd username(s) to sync instead of LETTERBOXD_USERS, e.g. --user alice,bob",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Scrape and resolve titles but do not add anything to Radarr",
    )
    parser.add_argument("--log-path", help="Write the sync log JSON to this path")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARN", "ERROR"],
        type=str.upper,
        help="Console log level",
    )
    return parser.parse_args(argv)


def _normalize_users(raw_values: Iterable[str] | None) -> list[str]:
    users: list[str] = []
    if raw_values:
        for item in raw_values:
            for raw in str(item).split(","):
                value = raw.strip()
                if value:
                    users.append(value)
    return users


def resolve_config_path(args: argparse.Namespace) -> Path | None:
    """Resolve the config path from CLI arguments.

    Args:
        args: Parsed argparse namespace.

    Returns:
        Resolved config path, or None when neither --config nor ./config.json exists.
    """
    if args.config:
        return Path(args.config).expanduser().resolve()
    default_file = Path.cwd() / "config.json"
    if default_file.exists():
        return default_file.resolve()
    return None


def parse_cli(argv: list[str] | None = None) -> RunOptions:
    """Parse command-line arguments into RunOptions."""
    args = _parse_run_args(argv)
    return RunOptions(
        config_path=resolve_config_path(args),
        users=_normalize_users(args.user),
        dry_run=bool(args.dry_run),
        log_path=Path(args.log_path).expanduser().resolve() if args.log_path else None,
        log_level=args.log_level,
    )
