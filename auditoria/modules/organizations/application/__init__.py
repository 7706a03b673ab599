"""Organizations application layer: commands, queries, DTOs and event handlers."""
