"""Quiz session engine."""
