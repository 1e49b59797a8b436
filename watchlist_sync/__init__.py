"""Package entrypoint for ``python -m watchlist_sync``."""
