"""Sync pipeline core: matching, orchestration and services."""
