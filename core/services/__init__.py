"""Run services: TMDb resolution and the sync log."""
