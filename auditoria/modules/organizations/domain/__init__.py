"""Organizations domain layer."""
