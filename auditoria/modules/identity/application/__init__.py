"""
Identity application layer.

Commands and queries (one module per use case, each with its handler), DTOs,
mappers and the identity event handlers. Handlers receive a unit-of-work
factory and open one transaction per call.
"""
