"""Loading a user together with the profile its type requires."""

from uuid import UUID

from auditoria.modules.identity.domain.aggregates.external_profile import ExternalProfile
from auditoria.modules.identity.domain.aggregates.internal_profile import InternalProfile
from auditoria.modules.identity.domain.aggregates.user import User
from auditoria.modules.identity.domain.errors import InvalidUserTypeError, MissingUserProfileError
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWork


async def load_external_profile(
    uow: IdentityUnitOfWork, user_id: UUID
) -> tuple[User, ExternalProfile]:
    """
    The external user ``user_id`` and its profile.

    Raises:
        UserNotFoundError: If the user does not exist
        InvalidUserTypeError: If the user is internal
        MissingUserProfileError: If the user has no external profile
    """
    user = await uow.users.find_by_id_or_fail(user_id)
    if not user.is_external:
        raise InvalidUserTypeError("El usuario no es un usuario externo")
    profile = await uow.external_profiles.find_by_user_id(user.id)
    if profile is None:
        raise MissingUserProfileError("externo", user.id)
    return user, profile


async def load_internal_profile(
    uow: IdentityUnitOfWork, user_id: UUID
) -> tuple[User, InternalProfile]:
    """
    The internal user ``user_id`` and its profile.

    Raises:
        UserNotFoundError: If the user does not exist
        InvalidUserTypeError: If the user is external
        MissingUserProfileError: If the user has no internal profile
    """
    user = await uow.users.find_by_id_or_fail(user_id)
    if not user.is_internal:
        raise InvalidUserTypeError("El usuario no es un usuario interno")
    profile = await uow.internal_profiles.find_by_user_id(user.id)
    if profile is None:
        raise MissingUserProfileError("interno", user.id)
    return user, profile
