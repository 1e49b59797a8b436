"""Letterboxd watchlist scraping."""
