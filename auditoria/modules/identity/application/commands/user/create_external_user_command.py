"""
Create external user command implementation.

Creates a client user attached to an existing organization. External users
always hold exactly the CLIENTE role.
"""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserDetailResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.identity.domain.enums import Role, UserType
from auditoria.modules.identity.domain.interfaces.password_hasher import IPasswordHasher
from auditoria.modules.identity.domain.services.user_uniqueness_validator import (
    UserUniquenessValidator,
)
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory

logger = get_logger(__name__)


class CreateExternalUserCommand(Command):
    """Command to create a client user for an organization."""

    def __init__(
        self,
        names: str,
        last_names: str,
        email: str,
        username: str,
        password: str,
        ci: str,
        organization_id: UUID | str,
        phone: str | None = None,
        address: str | None = None,
        image: str | None = None,
        job_title: str | None = None,
        department: str | None = None,
        organizational_email: str | None = None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.names = names
        self.last_names = last_names
        self.email = email
        self.username = username
        self.password = password
        self.ci = ci
        self.organization_id = organization_id
        self.phone = phone
        self.address = address
        self.image = image
        self.job_title = job_title
        self.department = department
        self.organizational_email = organizational_email
        self._freeze()

    def _validate(self) -> None:
        self.password = validate_string(self.password, "password", min_length=8, max_length=72)
        self.organization_id = validate_uuid(self.organization_id, "organization_id")
        self.job_title = validate_string(
            self.job_title, "job_title", required=False, max_length=100
        )
        self.department = validate_string(
            self.department, "department", required=False, max_length=100
        )


class CreateExternalUserCommandHandler(
    CommandHandler[CreateExternalUserCommand, UserDetailResponse]
):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, password_hasher: IPasswordHasher):
        self._uow_factory = uow_factory
        self._password_hasher = password_hasher

    async def handle(self, command: CreateExternalUserCommand) -> UserDetailResponse:
        """
        Create the user and its external profile.

        Raises:
            OrganizationNotFoundError: If the organization does not exist
            DuplicateEmailError, DuplicateUsernameError, DuplicateCiError:
                If a unique field is taken
        """
        hashed_password = self._password_hasher.hash(command.password)
        user = User.create(
            user_type=UserType.EXTERNAL,
            names=command.names,
            last_names=command.last_names,
            email=command.email,
            username=command.username,
            password=hashed_password,
            ci=command.ci,
            roles=[Role.CLIENTE],
            phone=command.phone,
            address=command.address,
            image=command.image,
        )

        async with self._uow_factory() as uow:
            await uow.organizations.find_by_id_or_fail(command.organization_id)
            await UserUniquenessValidator(uow.users).validate_for_create(
                user.email.value, user.username.value, user.ci.value
            )

            await uow.users.save(user)
            profile = ExternalProfile.create(
                user_id=user.id,
                organization_id=command.organization_id,
                job_title=command.job_title,
                department=command.department,
                organizational_email=command.organizational_email,
            )
            await uow.external_profiles.save(profile)

            user.mark_as_created()
            uow.collect(user, profile)

        logger.info(
            "External user created",
            user_id=str(user.id),
            organization_id=str(command.organization_id),
        )
        return UserMapper.to_detail_response(user, external_profile=profile)
