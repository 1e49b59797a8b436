#!/usr/bin/env python3
"""CLI entrypoint for the Letterboxd to Radarr watchlist sync."""

from __future__ import annotations

from cli import parse_cli
from config import load_config, validate_config
from core.errors import SyncError
from core.run import run
from logger import get_logger

log = get_logger()


def main(argv: list[str] | None = None) -> int:
    """Run the CLI entrypoint.

    Returns:
        Process exit code.
    """
    print("\nLetterboxd → Radarr watchlist sync\n")
    options = parse_cli(argv)

    if options.config_path:
        if not options.config_path.exists():
            print(f"Config path not found: {options.config_path}")
            return 2
        if options.config_path.is_dir():
            print(f"Config path must be a file: {options.config_path}")
            return 2

    cfg = load_config(options.config_path)
    if options.users:
        cfg.letterboxd.users = list(options.users)
    log.set_level(options.log_level or cfg.log_level)

    problems = validate_config(cfg)
    if problems:
        for problem in problems:
            print(problem)
        return 2

    try:
        return run(options, cfg)
    except SyncError as exc:
        log.error(f"Sync aborted: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
