"""Authorization catalog commands."""

from auditoria.modules.identity.application.commands.authorization.sync_authorization_catalog_command import (  # noqa: E501
    SyncAuthorizationCatalogCommand,
    SyncAuthorizationCatalogCommandHandler,
)

__all__ = ["SyncAuthorizationCatalogCommand", "SyncAuthorizationCatalogCommandHandler"]
