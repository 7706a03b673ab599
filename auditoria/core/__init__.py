"""Core building blocks shared by every module.

Architecture Components:
- domain: AggregateRoot, ValueObject and DomainEvent primitives
- cqrs: command and query base classes
- events: in-process event bus
- infrastructure: SQL unit of work
- Cross-cutting: configuration, errors, logging, request context, validation
"""
