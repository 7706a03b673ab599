"""Roles, menus and authorization catalog endpoints."""

from fastapi import APIRouter, Depends

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.identity.application.commands.authorization import (
    SyncAuthorizationCatalogCommand,
    SyncAuthorizationCatalogCommandHandler,
)
from auditoria.modules.identity.application.dtos import (
    CatalogSyncResponse,
    MenuResponse,
    RoleResponse,
)
from auditoria.modules.identity.application.queries.authorization import (
    GetRoleMenusQuery,
    GetRoleMenusQueryHandler,
    GetUserMenusQuery,
    GetUserMenusQueryHandler,
    ListRolesQuery,
    ListRolesQueryHandler,
)
from auditoria.presentation.dependencies import (
    get_authenticated_context,
    get_container,
    require_permissions,
)

router = APIRouter(tags=["authorization"])


@router.get("/roles", response_model=list[RoleResponse])
async def list_roles(
    context: RequestContext = Depends(require_permissions("roles:read")),
    container: ApplicationContainer = Depends(get_container),
) -> list[RoleResponse]:
    return await ListRolesQueryHandler(container.identity_uow)(ListRolesQuery(context=context))


@router.get("/menus/me", response_model=list[MenuResponse])
async def get_my_menus(
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> list[MenuResponse]:
    return await GetUserMenusQueryHandler(container.identity_uow)(
        GetUserMenusQuery(context.user_id, context=context)
    )


@router.get("/menus/roles/{role}", response_model=list[MenuResponse])
async def get_role_menus(
    role: str,
    context: RequestContext = Depends(get_authenticated_context),
) -> list[MenuResponse]:
    """Menus of ``role`` from the static configuration."""
    return await GetRoleMenusQueryHandler()(GetRoleMenusQuery(role, context=context))


@router.post("/authorization/sync", response_model=CatalogSyncResponse)
async def sync_authorization_catalog(
    context: RequestContext = Depends(require_permissions("settings:update")),
    container: ApplicationContainer = Depends(get_container),
) -> CatalogSyncResponse:
    """Rewrite persisted permissions, role links and menus from configuration."""
    return await SyncAuthorizationCatalogCommandHandler(container.identity_uow)(
        SyncAuthorizationCatalogCommand(context=context)
    )
