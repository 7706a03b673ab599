"""Organization endpoints (client companies, ``clients:*`` permissions)."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.organizations.application.commands import (
    CreateOrganizationCommand,
    CreateOrganizationCommandHandler,
    DeleteOrganizationCommand,
    DeleteOrganizationCommandHandler,
    UpdateOrganizationCommand,
    UpdateOrganizationCommandHandler,
    OrganizationImage,
    UploadOrganizationImageCommand,
    UploadOrganizationImageCommandHandler,
)
from auditoria.modules.organizations.application.dtos import OrganizationResponse
from auditoria.modules.organizations.application.queries import (
    GetOrganizationQuery,
    GetOrganizationQueryHandler,
    ListOrganizationsQuery,
    ListOrganizationsQueryHandler,
)
from auditoria.modules.organizations.presentation.schemas import (
    CreateOrganizationRequest,
    UpdateOrganizationRequest,
)
from auditoria.presentation.dependencies import get_container, require_permissions
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.post("", response_model=OrganizationResponse, status_code=status.HTTP_201_CREATED)
async def create_organization(
    body: CreateOrganizationRequest,
    context: RequestContext = Depends(require_permissions("clients:create")),
    container: ApplicationContainer = Depends(get_container),
) -> OrganizationResponse:
    return await CreateOrganizationCommandHandler(container.organizations_uow)(
        CreateOrganizationCommand(**body.model_dump(), context=context)
    )


@router.get("", response_model=PagedResponse[OrganizationResponse])
async def list_organizations(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    is_active: bool | None = Query(None),
    search: str | None = Query(None),
    context: RequestContext = Depends(require_permissions("clients:read")),
    container: ApplicationContainer = Depends(get_container),
) -> PagedResponse[OrganizationResponse]:
    query = ListOrganizationsQuery(
        page=page, page_size=page_size, is_active=is_active, search=search, context=context
    )
    return await ListOrganizationsQueryHandler(container.organizations_uow)(query)


@router.get("/{organization_id}", response_model=OrganizationResponse)
async def get_organization(
    organization_id: UUID,
    context: RequestContext = Depends(require_permissions("clients:read")),
    container: ApplicationContainer = Depends(get_container),
) -> OrganizationResponse:
    return await GetOrganizationQueryHandler(container.organizations_uow)(
        GetOrganizationQuery(organization_id, context=context)
    )


@router.patch("/{organization_id}", response_model=OrganizationResponse)
async def update_organization(
    organization_id: UUID,
    body: UpdateOrganizationRequest,
    context: RequestContext = Depends(require_permissions("clients:update")),
    container: ApplicationContainer = Depends(get_container),
) -> OrganizationResponse:
    command = UpdateOrganizationCommand(
        organization_id, body.model_dump(exclude_unset=True), context=context
    )
    return await UpdateOrganizationCommandHandler(container.organizations_uow)(command)


@router.delete("/{organization_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_organization(
    organization_id: UUID,
    context: RequestContext = Depends(require_permissions("clients:delete")),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    await DeleteOrganizationCommandHandler(container.organizations_uow)(
        DeleteOrganizationCommand(organization_id, context=context)
    )


async def _upload_image(
    organization_id: UUID,
    kind: OrganizationImage,
    file: UploadFile,
    context: RequestContext,
    container: ApplicationContainer,
) -> OrganizationResponse:
    command = UploadOrganizationImageCommand(
        organization_id, kind, await file.read(), file.content_type, context=context
    )
    handler = UploadOrganizationImageCommandHandler(
        container.organizations_uow, container.file_storage()
    )
    return await handler(command)


@router.put("/{organization_id}/logo", response_model=OrganizationResponse)
async def upload_logo(
    organization_id: UUID,
    file: UploadFile = File(...),
    context: RequestContext = Depends(require_permissions("clients:update")),
    container: ApplicationContainer = Depends(get_container),
) -> OrganizationResponse:
    return await _upload_image(organization_id, OrganizationImage.LOGO, file, context, container)


@router.put("/{organization_id}/banner", response_model=OrganizationResponse)
async def upload_banner(
    organization_id: UUID,
    file: UploadFile = File(...),
    context: RequestContext = Depends(require_permissions("clients:update")),
    container: ApplicationContainer = Depends(get_container),
) -> OrganizationResponse:
    return await _upload_image(
        organization_id, OrganizationImage.BANNER, file, context, container
    )
