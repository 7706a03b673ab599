"""
Update internal user command implementation.

Changes the staff data kept on the internal profile. Account fields and roles
are changed through the user update.
"""

from datetime import date
from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.errors import ValidationError
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.application.profile_loader import load_internal_profile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.errors import (
    DuplicateEmployeeCodeError,
    InvalidUserDataError,
)
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class UpdateInternalUserCommand(Command):
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
        unknown = set(self.changes) - InternalProfile.PROFILE_FIELDS
        if unknown:
            raise InvalidUserDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )

        if "department" in self.changes:
            self.changes["department"] = validate_string(
                self.changes["department"], "department", required=False, max_length=100
            )
        if "employee_code" in self.changes:
            self.changes["employee_code"] = validate_string(
                self.changes["employee_code"], "employee_code", required=False, max_length=50
            )
        hire_date = self.changes.get("hire_date")
        if hire_date is not None and not isinstance(hire_date, date):
            raise ValidationError("hire_date must be a date", field="hire_date")


class UpdateInternalUserCommandHandler(
    CommandHandler[UpdateInternalUserCommand, UserDetailResponse]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: UpdateInternalUserCommand) -> UserDetailResponse:
        """
        Raises:
            UserNotFoundError: If the user does not exist
            InvalidUserTypeError: If the user is external
            MissingUserProfileError: If the user has no internal profile
            DuplicateEmployeeCodeError: If another profile holds the employee code
        """
        changes = command.changes

        async with self._uow_factory() as uow:
            user, profile = await load_internal_profile(uow, command.user_id)

            employee_code = changes.get("employee_code")
            if employee_code and employee_code != profile.employee_code:
                holder = await uow.internal_profiles.find_by_employee_code(employee_code)
                if holder is not None and holder.user_id != user.id:
                    raise DuplicateEmployeeCodeError(employee_code)

            profile.update_profile(**changes)
            await uow.internal_profiles.save(profile)
            uow.collect(profile)

        logger.info("Internal profile updated", user_id=str(user.id), fields=sorted(changes))
        return UserMapper.to_detail_response(user, internal_profile=profile)
