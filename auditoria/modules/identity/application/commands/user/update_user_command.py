"""
Update user command implementation.

Applies a partial update. Only the fields present in ``changes`` are touched;
an explicit ``None`` clears an optional field.
"""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_uuid
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.aggregates.internal_profile import validate_system_roles
from auditoria.modules.identity.domain.aggregates.user import validate_user_roles
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.errors import InvalidUserDataError, InvalidUserTypeError
from auditoria.modules.identity.domain.services.user_uniqueness_validator import (
    UserUniquenessValidator,
)
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class UpdateUserCommand(Command):
    def __init__(
        self,
        user_id: UUID | str,
        changes: dict[str, Any],
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.user_id = user_id
        self.changes = dict(changes)
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")
        if not self.changes:
            raise InvalidUserDataError("No se proporcionaron campos para actualizar")


class UpdateUserCommandHandler(CommandHandler[UpdateUserCommand, UserResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: UpdateUserCommand) -> UserResponse:
        """
        Update profile fields and/or roles of a user.

        Role changes are checked against the user type: internal users keep
        system roles only (mirrored onto their internal profile), external
        users keep CLIENTE.

        Raises:
            UserNotFoundError: If the user does not exist
            ImmutableUserTypeError: If the change set includes the user type
            DuplicateEmailError, DuplicateUsernameError, DuplicateCiError:
                If a changed unique field belongs to another user
        """
        changes = command.changes
        roles = validate_user_roles(changes["roles"]) if "roles" in changes else None

        async with self._uow_factory() as uow:
            user = await uow.users.find_by_id_or_fail(command.user_id)

            profile = None
            if roles is not None:
                if user.is_internal:
                    validate_system_roles(roles)
                    profile = await uow.internal_profiles.find_by_user_id(user.id)
                elif roles != [Role.CLIENTE]:
                    raise InvalidUserTypeError(
                        "Los usuarios externos solo pueden tener el rol cliente"
                    )

            user.update(**changes)

            await UserUniquenessValidator(uow.users).validate_for_update(
                user.id,
                email=user.email.value if "email" in changes else None,
                username=user.username.value if "username" in changes else None,
                ci=user.ci.value if "ci" in changes else None,
            )

            await uow.users.save(user)
            if profile is not None:
                profile.update_roles(roles)
                await uow.internal_profiles.save(profile)
            uow.collect(user)

        logger.info("User updated", user_id=str(user.id), fields=sorted(changes))
        return UserMapper.to_response(user)
