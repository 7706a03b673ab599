"""Notifications infrastructure: persistence models, repositories and adapters."""
