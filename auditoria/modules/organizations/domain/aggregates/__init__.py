"""Organization aggregates."""

from auditoria.modules.organizations.domain.aggregates.organization import Organization

__all__ = ["Organization"]
