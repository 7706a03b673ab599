"""Organizations infrastructure: persistence models, repositories and adapters."""
