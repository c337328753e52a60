"""Forest queries, caching and project layout."""
