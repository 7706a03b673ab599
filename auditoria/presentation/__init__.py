"""HTTP layer shared pieces: dependencies, middleware and exception handlers."""
