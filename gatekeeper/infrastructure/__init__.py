"""Infrastructure: cache backends and the SQL assignment store."""
