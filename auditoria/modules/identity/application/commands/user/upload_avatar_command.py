"""
Upload avatar command implementation.

Stores the image, points the user at it, then removes the previous avatar if
this storage owned it.
"""

from uuid import UUID

from auditoria.core.context import RequestContext
from auditoria.core.cqrs.base import Command, CommandHandler
from auditoria.core.logging import get_logger
from auditoria.core.validation import validate_string, validate_uuid
from auditoria.modules.identity.application.dtos.response import UserResponse
from auditoria.modules.identity.application.mappers.user_mapper import UserMapper
from auditoria.modules.identity.infrastructure.unit_of_work import IdentityUnitOfWorkFactory
from auditoria.shared.file_storage import LocalFileStorage

logger = get_logger(__name__)

AVATAR_FOLDER = "avatars"


class UploadAvatarCommand(Command):
    def __init__(
        self,
        user_id: UUID | str,
        content: bytes,
        content_type: str | None,
        context: RequestContext | None = None,
    ):
        super().__init__(context)
        self.user_id = user_id
        self.content = content
        self.content_type = content_type
        self._freeze()

    def _validate(self) -> None:
        self.user_id = validate_uuid(self.user_id, "user_id")
        self.content_type = validate_string(self.content_type, "content_type").lower()

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["content"] = f"<{len(self.content)} bytes>"
        return data


class UploadAvatarCommandHandler(CommandHandler[UploadAvatarCommand, UserResponse]):
    def __init__(self, uow_factory: IdentityUnitOfWorkFactory, storage: LocalFileStorage):
        self._uow_factory = uow_factory
        self._storage = storage

    async def handle(self, command: UploadAvatarCommand) -> UserResponse:
        """
        Replace the user's avatar.

        The new file is written before the transaction; if the transaction
        fails the new file is removed again.

        Raises:
            InvalidUploadError: If the file is empty, too large or not an image
            UserNotFoundError: If the user does not exist
        """
        self._storage.validate_upload(command.content, command.content_type)

        path = LocalFileStorage.build_path(
            AVATAR_FOLDER, command.user_id, command.content, command.content_type
        )
        url = await self._storage.save(path, command.content)

        try:
            async with self._uow_factory() as uow:
                user = await uow.users.find_by_id_or_fail(command.user_id)
                previous = user.image.value if user.image else None
                user.update(image=url)
                await uow.users.save(user)
                uow.collect(user)
        except Exception:
            await self._storage.delete(path)
            raise

        previous_path = self._storage.path_for_url(previous) if previous else None
        if previous_path and previous_path != path:
            await self._storage.delete(previous_path)

        logger.info("Avatar uploaded", user_id=str(user.id), path=path)
        return UserMapper.to_response(user)
