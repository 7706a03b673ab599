"""Password hashing contract."""

from typing import Protocol


class IPasswordHasher(Protocol):
    def hash(self, plain_password: str) -> str:
        """Return a self-describing hash of ``plain_password``."""
        ...

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        ...
