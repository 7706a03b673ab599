"""
Integration test fixtures.

Persisting helpers write through the units of work so each test starts with
exactly the rows it needs.
"""

import pytest

from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.organizations.domain.aggregates.organization import Organization
from auditoria.tests.builders import UserBuilder


@pytest.fixture
def create_user(identity_uow_factory):
    """Persist the user built by ``builder`` (a default internal auditor if omitted)."""

    async def create(builder: UserBuilder | None = None) -> User:
        user = (builder or UserBuilder()).build()
        async with identity_uow_factory() as uow:
            await uow.users.save(user)
        return user

    return create


@pytest.fixture
def create_organization(organizations_uow_factory):
    async def create(name: str = "Banco Unión", **fields) -> Organization:
        organization = Organization.create(name=name, **fields)
        async with organizations_uow_factory() as uow:
            await uow.organizations.save(organization)
        return organization

    return create
