"""Application layer – filter state, query compilation, search, fetching and URL sync."""
