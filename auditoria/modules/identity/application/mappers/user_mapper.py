"""
User mapper for converting User aggregates and their profiles to DTOs.
"""

from auditoria.modules.identity.application.dtos.response import (
    ExternalProfileResponse,
    InternalProfileResponse,
    UserDetailResponse,
    UserResponse,
)
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.aggregates.user import User


def _optional_value(value_object) -> str | None:
    return value_object.value if value_object is not None else None


class UserMapper:
    """Mapper for User domain objects to DTOs."""

    @staticmethod
    def _fields(user: User) -> dict:
        return {
            "id": user.id,
            "type": user.type.value,
            "names": user.names.value,
            "last_names": user.last_names.value,
            "full_name": user.full_name,
            "email": user.email.value,
            "username": user.username.value,
            "ci": user.ci.value,
            "phone": _optional_value(user.phone),
            "address": _optional_value(user.address),
            "image": _optional_value(user.image),
            "roles": [role.value for role in user.roles],
            "status": user.status.value,
            "is_locked": user.is_locked,
            "failed_login_attempts": user.failed_login_attempts,
            "lock_until": user.lock_until,
            "created_at": user.created_at,
            "updated_at": user.updated_at,
        }

    @classmethod
    def to_response(cls, user: User) -> UserResponse:
        return UserResponse(**cls._fields(user))

    @classmethod
    def to_detail_response(
        cls,
        user: User,
        internal_profile: InternalProfile | None = None,
        external_profile: ExternalProfile | None = None,
    ) -> UserDetailResponse:
        """
        Convert a user and whichever profile it owns.

        Args:
            user: User aggregate root
            internal_profile: Profile of an internal user, if loaded
            external_profile: Profile of an external user, if loaded

        Returns:
            UserDetailResponse DTO
        """
        return UserDetailResponse(
            **cls._fields(user),
            internal_profile=(
                cls.internal_profile_to_response(internal_profile) if internal_profile else None
            ),
            external_profile=(
                cls.external_profile_to_response(external_profile) if external_profile else None
            ),
        )

    @staticmethod
    def internal_profile_to_response(profile: InternalProfile) -> InternalProfileResponse:
        return InternalProfileResponse(
            id=profile.id,
            roles=[role.value for role in profile.roles],
            department=profile.department,
            employee_code=profile.employee_code,
            hire_date=profile.hire_date,
        )

    @staticmethod
    def external_profile_to_response(profile: ExternalProfile) -> ExternalProfileResponse:
        return ExternalProfileResponse(
            id=profile.id,
            organization_id=profile.organization_id,
            job_title=profile.job_title,
            department=profile.department,
            organizational_email=_optional_value(profile.organizational_email),
            is_active=profile.is_active,
            joined_at=profile.joined_at,
            left_at=profile.left_at,
        )
