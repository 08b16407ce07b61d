"""HTTP layer for browsing quiz sets."""
