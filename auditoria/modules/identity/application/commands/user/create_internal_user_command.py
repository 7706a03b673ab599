"""
Create internal user command implementation.

Creates a staff user and its internal profile in one transaction.
"""

from datetime import date
from typing import Any

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_list, validate_string
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.aggregates.internal_profile import (
    InternalProfile,
    validate_system_roles,
)
from auditoria.modules.identity.domain.aggregates.user import User, validate_user_roles
from auditoria.modules.identity.domain.enums import UserType
from auditoria.modules.identity.domain.interfaces.password_hasher import IPasswordHasher
from auditoria.modules.identity.domain.services.user_uniqueness_validator import (
    UserUniquenessValidator,
)
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class CreateInternalUserCommand(Command):
    """Command to create a staff user with system roles."""

    def __init__(
        self,
        names: str,
        last_names: str,
        email: str,
        username: str,
        password: str,
        ci: str,
        roles: list[Any],
        phone: str | None = None,
        address: str | None = None,
        image: str | None = None,
        department: str | None = None,
        employee_code: str | None = None,
        hire_date: date | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.names = names
        self.last_names = last_names
        self.email = email
        self.username = username
        self.password = password
        self.ci = ci
        self.roles = roles
        self.phone = phone
        self.address = address
        self.image = image
        self.department = department
        self.employee_code = employee_code
        self.hire_date = hire_date
        self._freeze()

    def _validate(self) -> None:
        self.password = validate_string(self.password, "password", min_length=8, max_length=72)
        self.roles = validate_list(self.roles, "roles", required=False) or []
        self.department = validate_string(
            self.department, "department", required=False, max_length=100
        )
        self.employee_code = validate_string(
            self.employee_code, "employee_code", required=False, max_length=50
        )


class CreateInternalUserCommandHandler(
    CommandHandler[CreateInternalUserCommand, UserDetailResponse]
):
    """Handler for creating internal users."""

    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, password_hasher: IPasswordHasher):
        self._uow_factory = uow_factory
        self._password_hasher = password_hasher

    async def handle(self, command: CreateInternalUserCommand) -> UserDetailResponse:
        """
        Create the user and its internal profile.

        Process:
        1. Validate the role set (before touching the database)
        2. Hash the password
        3. Check email, username and CI uniqueness
        4. Persist user and profile in the same transaction
        5. Publish UserCreated after commit

        Raises:
            MissingRolesError, ExclusiveRoleViolationError, InvalidUserDataError:
                If the role set is not a valid internal role set
            DuplicateEmailError, DuplicateUsernameError, DuplicateCiError:
                If a unique field is taken, including by a concurrent request
        """
        # 1. Role rules
        roles = validate_user_roles(command.roles)
        validate_system_roles(roles)

        # 2. Password
        hashed_password = self._password_hasher.hash(command.password)

        user = User.create(
            user_type=UserType.INTERNAL,
            names=command.names,
            last_names=command.last_names,
            email=command.email,
            username=command.username,
            password=hashed_password,
            ci=command.ci,
            roles=roles,
            phone=command.phone,
            address=command.address,
            image=command.image,
        )

        async with self._uow_factory() as uow:
            # 3. Uniqueness fast path; the unique indexes decide races
            await UserUniquenessValidator(uow.users).validate_for_create(
                user.email.value, user.username.value, user.ci.value
            )

            # 4. User and profile
            await uow.users.save(user)
            profile = InternalProfile.create(
                user_id=user.id,
                roles=roles,
                department=command.department,
                employee_code=command.employee_code,
                hire_date=command.hire_date,
            )
            await uow.internal_profiles.save(profile)

            user.mark_as_created()
            uow.collect(user, profile)

        logger.info(
            "Internal user created",
            user_id=str(user.id),
            roles=[role.value for role in roles],
            created_by=str(command.context.user_id) if command.context.user_id else None,
        )
        return UserMapper.to_detail_response(user, internal_profile=profile)
