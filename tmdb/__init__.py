"""TMDb API client."""
