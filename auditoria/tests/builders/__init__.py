"""Test data builders with unique values per instance."""

from auditoria.tests.builders.user_builder import FAKE_HASH, UserBuilder, unique_ci

__all__ = ["FAKE_HASH", "UserBuilder", "unique_ci"]
