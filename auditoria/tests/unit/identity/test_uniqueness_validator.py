"""
Unit tests for UserUniquenessValidator.

Tests cover:
- Clean create passes
- First duplicate wins in email, username, CI order
- Update excludes the user being updated and skips omitted fields
"""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from auditoria.modules.identity.domain.errors import (
    DuplicateCiError,
    DuplicateEmailError,
    DuplicateUsernameError,
)
from auditoria.modules.identity.domain.services import UserUniquenessValidator


def repository(email=False, username=False, ci=False) -> Mock:
    users = Mock()
    users.exists_by_email = AsyncMock(return_value=email)
    users.exists_by_username = AsyncMock(return_value=username)
    users.exists_by_ci = AsyncMock(return_value=ci)
    return users


@pytest.mark.unit
class TestUserUniquenessValidator:
    """Test duplicate detection before writes."""

    async def test_create_passes_when_nothing_is_taken(self):
        """Test no error when email, username and CI are free."""
        users = repository()

        await UserUniquenessValidator(users).validate_for_create("a@b.bo", "ana", "1234567")

        users.exists_by_email.assert_awaited_once_with("a@b.bo", None)
        users.exists_by_ci.assert_awaited_once_with("1234567", None)

    @pytest.mark.parametrize(
        ("taken", "error"),
        [
            ({"email": True, "username": True}, DuplicateEmailError),
            ({"username": True, "ci": True}, DuplicateUsernameError),
            ({"ci": True}, DuplicateCiError),
        ],
    )
    async def test_create_raises_first_duplicate(self, taken, error):
        """Test the first duplicate field in check order is reported."""
        with pytest.raises(error):
            await UserUniquenessValidator(repository(**taken)).validate_for_create(
                "a@b.bo", "ana", "1234567"
            )

    async def test_update_excludes_own_id_and_skips_missing_fields(self):
        """Test update passes the user id as exclusion and ignores None values."""
        users = repository()
        user_id = uuid4()

        await UserUniquenessValidator(users).validate_for_update(user_id, email="new@b.bo")

        users.exists_by_email.assert_awaited_once_with("new@b.bo", user_id)
        users.exists_by_username.assert_not_awaited()
        users.exists_by_ci.assert_not_awaited()
