"""Config package facade."""

from config.loader import config_from_dict, load_config, validate_config
from config.models import (
    Config,
    LetterboxdConfig,
    RadarrConfig,
    SyncLogConfig,
    TmdbConfig,
    WriteConfig,
)

__all__ = [
    "Config",
    "LetterboxdConfig",
    "RadarrConfig",
    "SyncLogConfig",
    "TmdbConfig",
    "WriteConfig",
    "config_from_dict",
    "load_config",
    "validate_config",
]
