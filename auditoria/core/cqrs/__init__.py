"""Command/query base classes."""

from auditoria.core.cqrs.base import Command, CommandHandler, Query, QueryHandler

__all__ = ["Command", "CommandHandler", "Query", "QueryHandler"]
