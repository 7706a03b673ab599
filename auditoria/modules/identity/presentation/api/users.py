"""User management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.identity.application.commands.user import (
    ChangePasswordCommand,
    ChangePasswordCommandHandler,
    ChangeUserStatusCommand,
    ChangeUserStatusCommandHandler,
    CreateExternalUserCommand,
    CreateExternalUserCommandHandler,
    CreateInternalUserCommand,
    CreateInternalUserCommandHandler,
    DeleteUserCommand,
    DeleteUserCommandHandler,
    ResetLoginAttemptsCommand,
    ResetLoginAttemptsCommandHandler,
    UpdateUserCommand,
    UpdateUserCommandHandler,
    UploadAvatarCommand,
    UploadAvatarCommandHandler,
)
from auditoria.modules.identity.application.dtos import (
    MenuResponse,
    UserDetailResponse,
    UserResponse,
)
from auditoria.modules.identity.application.queries.authorization import (
    GetUserMenusQuery,
    GetUserMenusQueryHandler,
)
from auditoria.modules.identity.application.queries.user import (
    GetUserQuery,
    GetUserQueryHandler,
    ListUsersQuery,
    ListUsersQueryHandler,
)
from auditoria.modules.identity.presentation.schemas import (
    ChangePasswordRequest,
    CreateExternalUserRequest,
    CreateInternalUserRequest,
    UpdateUserRequest,
)
from auditoria.presentation.dependencies import (
    ensure_self_or_permission,
    get_authenticated_context,
    get_container,
    require_permissions,
)
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/internal", response_model=UserDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_internal_user(
    body: CreateInternalUserRequest,
    context: RequestContext = Depends(require_permissions("users:create")),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    """Create a staff user together with its internal profile."""
    handler = CreateInternalUserCommandHandler(
        container.identity_uow, container.password_hasher()
    )
    return await handler(CreateInternalUserCommand(**body.model_dump(), context=context))


@router.post("/external", response_model=UserDetailResponse, status_code=status.HTTP_201_CREATED)
async def create_external_user(
    body: CreateExternalUserRequest,
    context: RequestContext = Depends(require_permissions("users:create")),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    """Create a client user attached to an existing organization."""
    handler = CreateExternalUserCommandHandler(
        container.identity_uow, container.password_hasher()
    )
    return await handler(CreateExternalUserCommand(**body.model_dump(), context=context))


@router.get("", response_model=PagedResponse[UserResponse])
async def list_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    user_status: str | None = Query(None, alias="status"),
    user_type: str | None = Query(None, alias="type"),
    search: str | None = Query(None),
    context: RequestContext = Depends(require_permissions("users:read")),
    container: ApplicationContainer = Depends(get_container),
) -> PagedResponse[UserResponse]:
    query = ListUsersQuery(
        page=page,
        page_size=page_size,
        status=user_status,
        user_type=user_type,
        search=search,
        context=context,
    )
    return await ListUsersQueryHandler(container.identity_uow)(query)


@router.get("/{user_id}", response_model=UserDetailResponse)
async def get_user(
    user_id: UUID,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    ensure_self_or_permission(context, user_id, "users:read")
    return await GetUserQueryHandler(container.identity_uow)(
        GetUserQuery(user_id, context=context)
    )


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    body: UpdateUserRequest,
    context: RequestContext = Depends(require_permissions("users:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    command = UpdateUserCommand(user_id, body.model_dump(exclude_unset=True), context=context)
    return await UpdateUserCommandHandler(container.identity_uow)(command)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("users:delete")),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    await DeleteUserCommandHandler(container.identity_uow)(
        DeleteUserCommand(user_id, context=context)
    )


@router.post("/{user_id}/activate", response_model=UserResponse)
async def activate_user(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("users:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    return await ChangeUserStatusCommandHandler(container.identity_uow)(
        ChangeUserStatusCommand(user_id, active=True, context=context)
    )


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("users:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    return await ChangeUserStatusCommandHandler(container.identity_uow)(
        ChangeUserStatusCommand(user_id, active=False, context=context)
    )


@router.put("/{user_id}/password", response_model=UserResponse)
async def change_password(
    user_id: UUID,
    body: ChangePasswordRequest,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    """Set a new password; every session of the user is closed."""
    ensure_self_or_permission(context, user_id, "users:update")
    handler = ChangePasswordCommandHandler(container.identity_uow, container.password_hasher())
    return await handler(
        ChangePasswordCommand(
            user_id,
            body.new_password,
            current_password=body.current_password,
            context=context,
        )
    )


@router.delete("/{user_id}/failed-logins", response_model=UserResponse)
async def reset_login_attempts(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("users:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    """Clear the failed login counter and any lock."""
    return await ResetLoginAttemptsCommandHandler(container.identity_uow)(
        ResetLoginAttemptsCommand(user_id, context=context)
    )


@router.put("/{user_id}/avatar", response_model=UserResponse)
async def upload_avatar(
    user_id: UUID,
    file: UploadFile = File(...),
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> UserResponse:
    ensure_self_or_permission(context, user_id, "users:update")
    command = UploadAvatarCommand(
        user_id, await file.read(), file.content_type, context=context
    )
    return await UploadAvatarCommandHandler(container.identity_uow, container.file_storage())(
        command
    )


@router.get("/{user_id}/menus", response_model=list[MenuResponse])
async def get_user_menus(
    user_id: UUID,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> list[MenuResponse]:
    """Persisted menus visible to every role of the user."""
    ensure_self_or_permission(context, user_id, "users:read")
    return await GetUserMenusQueryHandler(container.identity_uow)(
        GetUserMenusQuery(user_id, context=context)
    )
