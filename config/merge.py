"""Config merging helpers."""

from __future__ import annotations

import os
from typing import Any, Dict, Mapping


def merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge overrides into base."""
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


# Environment variable -> (section, key). A section of None means top level.
ENV_OVERRIDES = {
    "RADARR_URL": ("radarr", "url"),
    "RADARR_API_KEY": ("radarr", "api_key"),
    "RADARR_ROOT_FOLDER": ("radarr", "root_folder_path"),
    "RADARR_QUALITY_PROFILE_ID": ("radarr", "quality_profile_id"),
    "LETTERBOXD_USERS": ("letterboxd", "users"),
    "APP_ENV": ("sync_log", "environment"),
    "CI": ("sync_log", "ci"),
    "SYNC_LOG_PATH": ("sync_log", "path"),
    "LOG_LEVEL": (None, "log_level"),
}


def env_overrides(environ: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Collect config overrides from environment variables.

    Args:
        environ: Environment mapping; defaults to ``os.environ``.

    Returns:
        Raw config dictionary containing only the variables that are set.
    """
    env = os.environ if environ is None else environ
    raw: Dict[str, Any] = {}
    for name, (section, key) in ENV_OVERRIDES.items():
        value = env.get(name)
        if value is None or value == "":
            continue
        if section is None:
            raw[key] = value
        else:
            raw.setdefault(section, {})[key] = value
    return raw


def merge_sections(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Merge per-section overrides into the base config."""
    merged = dict(base)
    for section, values in overrides.items():
        if isinstance(values, dict) and isinstance(merged.get(section), dict):
            merged[section] = merge_dicts(merged[section], values)
        else:
            merged[section] = values
    return merged
