"""
Login lockout policy.

Decides when repeated failed logins lock an account and for how long.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from auditoria.core.config import LoginPolicyConfig
from auditoria.core.domain.base import utc_now


@dataclass(frozen=True)
class LoginPolicy:
    max_attempts: int = 3
    lock_duration_minutes: int = 30

    @property
    def lock_duration(self) -> timedelta:
        return timedelta(minutes=self.lock_duration_minutes)

    def should_lock_account(self, failed_attempts: int) -> bool:
        return failed_attempts >= self.max_attempts

    def calculate_lock_until(self, now: datetime | None = None) -> datetime:
        return (now or utc_now()) + self.lock_duration

    @classmethod
    def default(cls) -> "LoginPolicy":
        return cls(3, 30)

    @classmethod
    def strict(cls) -> "LoginPolicy":
        return cls(2, 60)

    @classmethod
    def relaxed(cls) -> "LoginPolicy":
        return cls(5, 15)

    @classmethod
    def from_config(cls, config: LoginPolicyConfig) -> "LoginPolicy":
        return cls(config.max_attempts, config.lock_duration_minutes)
