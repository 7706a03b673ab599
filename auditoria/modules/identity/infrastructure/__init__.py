"""Identity infrastructure: persistence models, repositories and adapters."""
