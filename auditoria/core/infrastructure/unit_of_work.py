"""
Unit of Work.

Coordinates one database transaction with the publication of the domain
events raised while it was open.

Transaction Semantics:
- A fresh ``AsyncSession`` is opened on ``__aenter__``
- Aggregates hand their pending events over with ``collect``
- A clean exit commits, then publishes the collected events
- Any exception rolls back and discards the collected events
- ``IntegrityError`` is offered to ``translate_integrity_error`` so modules
  can turn unique-constraint violations into domain conflict errors
- Event handler failures never affect the committed transaction

Usage Example:
    async with IdentityUnitOfWork(session_factory, event_bus) as uow:
        user = await uow.users.find_by_id_or_fail(user_id)
        user.deactivate()
        await uow.users.save(user)
        uow.collect(user)
"""

from types import TracebackType

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from auditoria.core.database import SessionFactory
from auditoria.core.domain.base import AggregateRoot, DomainEvent
from auditoria.core.errors import AuditoriaError, InfrastructureError
from auditoria.core.events.bus import EventBus
from auditoria.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWorkError(InfrastructureError):
    """Misuse of the unit of work lifecycle."""

    default_code = "UNIT_OF_WORK_ERROR"


class TransactionError(InfrastructureError):
    """Raised when database transaction operations fail."""

    default_code = "TRANSACTION_ERROR"


class SqlUnitOfWork:
    """
    Base unit of work over an SQLAlchemy async session.

    Subclasses build their repositories in ``_init_repositories`` from
    ``self.session``; a unit of work is single use per ``async with`` block.
    """

    def __init__(self, session_factory: SessionFactory, event_bus: EventBus | None = None):
        self._session_factory = session_factory
        self._event_bus = event_bus
        self._session: AsyncSession | None = None
        self._events: list[DomainEvent] = []
        self._committed = False

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise UnitOfWorkError("Unit of Work is not active")
        return self._session

    def _init_repositories(self) -> None:
        """Create repositories bound to ``self.session``."""

    def translate_integrity_error(self, error: IntegrityError) -> AuditoriaError | None:
        """Map a constraint violation to a domain error, or None to keep it."""
        return None

    async def __aenter__(self) -> "SqlUnitOfWork":
        if self._session is not None:
            raise UnitOfWorkError("Unit of Work already in transaction context")

        self._session = self._session_factory()
        self._events = []
        self._committed = False
        self._init_repositories()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if exc_val is not None:
                await self.rollback()
                if isinstance(exc_val, IntegrityError):
                    self._raise_translated(exc_val)
                return

            await self.commit()
        finally:
            await self._close()

        await self._publish_collected_events()

    def collect(self, *aggregates: AggregateRoot) -> None:
        """Drain pending events of ``aggregates`` for publication after commit."""
        if self._committed:
            raise UnitOfWorkError("Cannot collect events after commit")

        for aggregate in aggregates:
            self._events.extend(aggregate.clear_domain_events())

    @property
    def collected_events(self) -> list[DomainEvent]:
        return list(self._events)

    async def commit(self) -> None:
        events_count = len(self._events)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.rollback()
            self._raise_translated(e)
        except SQLAlchemyError as e:
            logger.exception("Database commit failed", error=str(e), events_collected=events_count)
            await self.rollback()
            raise TransactionError(f"Database commit failed: {e}", cause=e) from e

        self._committed = True
        logger.debug("Unit of Work committed", events_collected=events_count)

    async def rollback(self) -> None:
        discarded = len(self._events)
        self._events = []
        if self._session is None:
            return
        await self._session.rollback()
        logger.info("Unit of Work rolled back", events_discarded=discarded)

    def _raise_translated(self, error: IntegrityError) -> None:
        translated = self.translate_integrity_error(error)
        if translated is not None:
            raise translated from error
        raise TransactionError(
            f"Integrity constraint violated: {error.orig}", cause=error
        ) from error

    async def _close(self) -> None:
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def _publish_collected_events(self) -> None:
        events, self._events = self._events, []
        if not events:
            return

        if self._event_bus is None:
            logger.warning("Events collected but no event bus available", event_count=len(events))
            return

        await self._event_bus.publish_all(events)
        logger.debug("Domain events published", event_count=len(events))


__all__ = ["SqlUnitOfWork", "TransactionError", "UnitOfWorkError"]
