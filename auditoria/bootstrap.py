"""
Application bootstrap.

Wires settings, the database engine, the event bus and the per-module units
of work into one dependency injection container. The container is created
once by ``create_app`` and stored on ``app.state.container``.
"""

from dependency_injector import containers, providers

from auditoria.core.config import Settings
from auditoria.core.database import create_engine_from_config, create_session_factory
from auditoria.core.events import InMemoryEventBus
from auditoria.core.logging import get_logger
from auditoria.modules.identity.application.event_handlers import (
    register_identity_event_handlers,
)
from auditoria.modules.identity.domain.policies.login_policy import LoginPolicy
from auditoria.modules.identity.infrastructure.security.password_hasher import (
    BcryptPasswordHasher,
)
from auditoria.modules.identity.infrastructure.security.token_service import TokenService
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWork
from auditoria.modules.notifications.application.event_handlers import (
    register_notification_event_handlers,
)
from auditoria.modules.notifications.infrastructure.unit_of_work import (
    NotificationsUnitOfWork,
)
from auditoria.modules.organizations.application.event_handlers import (
    register_organization_event_handlers,
)
from auditoria.modules.organizations.infrastructure.unit_of_work import (
    OrganizationsUnitOfWork,
)
from auditoria.shared.file_storage import LocalFileStorage

logger = get_logger(__name__)


class ApplicationContainer(containers.DeclarativeContainer):
    """Application dependency injection container."""

    settings = providers.Dependency(instance_of=Settings)

    # Infrastructure
    engine = providers.Singleton(
        create_engine_from_config,
        config=settings.provided.database,
    )
    session_factory = providers.Singleton(create_session_factory, engine=engine)
    event_bus = providers.Singleton(InMemoryEventBus)
    file_storage = providers.Singleton(LocalFileStorage, config=settings.provided.storage)

    # Security
    password_hasher = providers.Singleton(
        BcryptPasswordHasher.from_config,
        config=settings.provided.security,
    )
    login_policy = providers.Singleton(
        LoginPolicy.from_config,
        config=settings.provided.security.login_policy,
    )
    token_service = providers.Singleton(TokenService, config=settings.provided.security)

    # Units of work (a fresh one per use case)
    identity_uow = providers.Factory(
        IdentityUnitOfWork,
        session_factory=session_factory,
        event_bus=event_bus,
    )
    organizations_uow = providers.Factory(
        OrganizationsUnitOfWork,
        session_factory=session_factory,
        event_bus=event_bus,
    )
    notifications_uow = providers.Factory(
        NotificationsUnitOfWork,
        session_factory=session_factory,
        event_bus=event_bus,
    )


def create_container(settings: Settings) -> ApplicationContainer:
    container = ApplicationContainer()
    container.settings.override(providers.Object(settings))
    register_event_handlers(container.event_bus())
    return container


def register_event_handlers(event_bus: InMemoryEventBus) -> None:
    """Subscribe the audit log listeners of every module."""
    register_identity_event_handlers(event_bus)
    register_organization_event_handlers(event_bus)
    register_notification_event_handlers(event_bus)
    logger.info("Event handlers registered", modules=["identity", "organizations", "notifications"])


__all__ = ["ApplicationContainer", "create_container", "register_event_handlers"]
