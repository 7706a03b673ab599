"""External profile and internal user endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.identity.application.commands.profile import (
    DeleteExternalProfileCommand,
    DeleteExternalProfileCommandHandler,
    UpdateExternalProfileCommand,
    UpdateExternalProfileCommandHandler,
    UpdateInternalUserCommand,
    UpdateInternalUserCommandHandler,
)
from auditoria.modules.identity.application.dtos import UserDetailResponse
from auditoria.modules.identity.application.queries.profile import (
    GetExternalProfileQuery,
    GetExternalProfileQueryHandler,
    ListExternalProfilesQuery,
    ListExternalProfilesQueryHandler,
    ListInternalUsersQuery,
    ListInternalUsersQueryHandler,
)
from auditoria.modules.identity.presentation.schemas import (
    UpdateExternalProfileRequest,
    UpdateInternalUserRequest,
)
from auditoria.presentation.dependencies import get_container, require_permissions
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse

external_router = APIRouter(prefix="/external-profiles", tags=["external-profiles"])
internal_router = APIRouter(prefix="/internal-users", tags=["internal-users"])


@external_router.get("", response_model=PagedResponse[UserDetailResponse])
async def list_external_profiles(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    organization_id: UUID | None = Query(None),
    is_active: bool | None = Query(None),
    context: RequestContext = Depends(require_permissions("clients:read")),
    container: ApplicationContainer = Depends(get_container),
) -> PagedResponse[UserDetailResponse]:
    query = ListExternalProfilesQuery(
        page=page,
        page_size=page_size,
        organization_id=organization_id,
        is_active=is_active,
        context=context,
    )
    return await ListExternalProfilesQueryHandler(container.identity_uow)(query)


@external_router.get("/{user_id}", response_model=UserDetailResponse)
async def get_external_profile(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("clients:read")),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    return await GetExternalProfileQueryHandler(container.identity_uow)(
        GetExternalProfileQuery(user_id, context=context)
    )


@external_router.patch("/{user_id}", response_model=UserDetailResponse)
async def update_external_profile(
    user_id: UUID,
    body: UpdateExternalProfileRequest,
    context: RequestContext = Depends(require_permissions("clients:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    """Change job data, move to another organization or end the membership."""
    command = UpdateExternalProfileCommand(
        user_id, body.model_dump(exclude_unset=True), context=context
    )
    return await UpdateExternalProfileCommandHandler(container.identity_uow)(command)


@external_router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_external_profile(
    user_id: UUID,
    context: RequestContext = Depends(require_permissions("clients:delete")),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    await DeleteExternalProfileCommandHandler(container.identity_uow)(
        DeleteExternalProfileCommand(user_id, context=context)
    )


@internal_router.get("", response_model=PagedResponse[UserDetailResponse])
async def list_internal_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    role: str | None = Query(None),
    department: str | None = Query(None),
    context: RequestContext = Depends(require_permissions("users:read")),
    container: ApplicationContainer = Depends(get_container),
) -> PagedResponse[UserDetailResponse]:
    query = ListInternalUsersQuery(
        page=page, page_size=page_size, role=role, department=department, context=context
    )
    return await ListInternalUsersQueryHandler(container.identity_uow)(query)


@internal_router.patch("/{user_id}", response_model=UserDetailResponse)
async def update_internal_user(
    user_id: UUID,
    body: UpdateInternalUserRequest,
    context: RequestContext = Depends(require_permissions("users:update")),
    container: ApplicationContainer = Depends(get_container),
) -> UserDetailResponse:
    """Change the staff data on the internal profile."""
    command = UpdateInternalUserCommand(
        user_id, body.model_dump(exclude_unset=True), context=context
    )
    return await UpdateInternalUserCommandHandler(container.identity_uow)(command)
