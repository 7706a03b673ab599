"""
Update external profile command implementation.

Changes the membership data of a client user: job data, the organization it
belongs to and whether the membership is active.
"""

from typing import Any
from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_boolean, validate_string, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.application.profile_loader import load_external_profile
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.errors import InvalidUserDataError
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)

UPDATABLE_FIELDS = ExternalProfile.PROFILE_FIELDS | {"organization_id", "is_active"}


class UpdateExternalProfileCommand(Command):
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
        unknown = set(self.changes) - UPDATABLE_FIELDS
        if unknown:
            raise InvalidUserDataError(
                f"Campos no actualizables: {', '.join(sorted(unknown))}"
            )

        for name in ("job_title", "department"):
            if name in self.changes:
                self.changes[name] = validate_string(
                    self.changes[name], name, required=False, max_length=100
                )
        if "organization_id" in self.changes:
            self.changes["organization_id"] = validate_uuid(
                self.changes["organization_id"], "organization_id"
            )
        if "is_active" in self.changes:
            self.changes["is_active"] = validate_boolean(self.changes["is_active"], "is_active")


class UpdateExternalProfileCommandHandler(
    CommandHandler[UpdateExternalProfileCommand, UserDetailResponse]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory):
        self._uow_factory = uow_factory

    async def handle(self, command: UpdateExternalProfileCommand) -> UserDetailResponse:
        """
        Apply the changes to the profile of an external user.

        Moving to another organization restarts the membership date.

        Raises:
            UserNotFoundError: If the user does not exist
            InvalidUserTypeError: If the user is internal
            MissingUserProfileError: If the user has no external profile
            OrganizationNotFoundError: If the target organization does not exist
        """
        changes = command.changes

        async with self._uow_factory() as uow:
            user, profile = await load_external_profile(uow, command.user_id)

            profile_changes = {
                name: value
                for name, value in changes.items()
                if name in ExternalProfile.PROFILE_FIELDS
            }
            if profile_changes:
                profile.update_profile(**profile_changes)

            organization_id = changes.get("organization_id")
            if organization_id is not None and organization_id != profile.organization_id:
                await uow.organizations.find_by_id_or_fail(organization_id)
                profile.change_organization(organization_id)

            if changes.get("is_active") is True and not profile.is_active:
                profile.activate()
            elif changes.get("is_active") is False and profile.is_active:
                profile.deactivate()

            await uow.external_profiles.save(profile)
            uow.collect(profile)

        logger.info(
            "External profile updated",
            user_id=str(user.id),
            organization_id=str(profile.organization_id),
            fields=sorted(changes),
        )
        return UserMapper.to_detail_response(user, external_profile=profile)
