"""
Unit tests for the aggregate root base.

Tests cover:
- Soft delete / restore round trip and idempotency
- Domain event buffer draining
"""

from dataclasses import dataclass

import pytest

from auditoria.core.domain.base import AggregateRoot, DomainEvent


@dataclass(frozen=True, kw_only=True)
class ThingHappened(DomainEvent):
    detail: str = ""


class Thing(AggregateRoot):
    pass


@pytest.mark.unit
class TestSoftDelete:
    """Test suite for soft delete and restore."""

    def test_soft_delete_then_restore_clears_deleted_at(self):
        """Test restore after soft delete returns deleted_at to None."""
        thing = Thing()

        thing.soft_delete()
        assert thing.is_deleted
        assert thing.deleted_at is not None

        thing.restore()
        assert not thing.is_deleted
        assert thing.deleted_at is None

    def test_soft_delete_twice_keeps_first_timestamp(self):
        """Test a second soft delete changes neither deleted_at nor updated_at."""
        thing = Thing()
        thing.soft_delete()
        deleted_at, updated_at = thing.deleted_at, thing.updated_at

        thing.soft_delete()

        assert thing.deleted_at == deleted_at
        assert thing.updated_at == updated_at

    def test_restore_when_not_deleted_is_noop(self):
        """Test restore on a live aggregate does not touch it."""
        thing = Thing()
        updated_at = thing.updated_at

        thing.restore()

        assert thing.deleted_at is None
        assert thing.updated_at == updated_at


@pytest.mark.unit
class TestDomainEvents:
    """Test suite for the pending event buffer."""

    def test_clear_domain_events_drains_buffer(self):
        """Test clear_domain_events returns pending events once."""
        thing = Thing()
        thing.add_domain_event(ThingHappened(aggregate_id=thing.id, detail="a"))
        thing.add_domain_event(ThingHappened(aggregate_id=thing.id, detail="b"))

        drained = thing.clear_domain_events()

        assert [event.detail for event in drained] == ["a", "b"]
        assert thing.clear_domain_events() == []
        assert not thing.has_domain_events

    def test_domain_events_is_a_snapshot(self):
        """Test mutating the returned list leaves the buffer alone."""
        thing = Thing()
        thing.add_domain_event(ThingHappened(aggregate_id=thing.id))

        thing.domain_events.clear()

        assert len(thing.domain_events) == 1

    def test_rejects_non_events(self):
        """Test only DomainEvent instances are accepted."""
        with pytest.raises(TypeError):
            Thing().add_domain_event("not an event")

    def test_event_to_dict_serializes_ids_and_type(self):
        """Test event payloads are JSON friendly."""
        thing = Thing()
        data = ThingHappened(aggregate_id=thing.id, detail="x").to_dict()

        assert data["aggregate_id"] == str(thing.id)
        assert data["event_type"] == "ThingHappened"
        assert isinstance(data["occurred_at"], str)
