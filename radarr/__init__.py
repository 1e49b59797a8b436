"""Radarr API client."""
