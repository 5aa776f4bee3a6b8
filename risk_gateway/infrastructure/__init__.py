"""Infrastructure adapters - database and repositories."""
