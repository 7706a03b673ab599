"""Organizations HTTP API."""
