"""Database infrastructure (connection pool, error translation)."""
