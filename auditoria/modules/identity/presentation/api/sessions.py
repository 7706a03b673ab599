"""Session endpoints for the authenticated principal."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.identity.application.commands.session import (
    InvalidateSessionCommand,
    InvalidateSessionCommandHandler,
    SwitchRoleCommand,
    SwitchRoleCommandHandler,
)
from auditoria.modules.identity.application.dtos import SessionResponse
from auditoria.modules.identity.application.queries.session import (
    ListMySessionsQuery,
    ListMySessionsQueryHandler,
)
from auditoria.modules.identity.presentation.schemas import SwitchRoleRequest
from auditoria.presentation.dependencies import get_authenticated_context, get_container

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.get("/me", response_model=list[SessionResponse])
async def list_my_sessions(
    current_session_id: UUID | None = Query(None),
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> list[SessionResponse]:
    query = ListMySessionsQuery(current_session_id=current_session_id, context=context)
    return await ListMySessionsQueryHandler(container.identity_uow)(query)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def invalidate_session(
    session_id: UUID,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    await InvalidateSessionCommandHandler(container.identity_uow)(
        InvalidateSessionCommand(session_id, context=context)
    )


@router.post("/{session_id}/switch-role", response_model=SessionResponse)
async def switch_role(
    session_id: UUID,
    body: SwitchRoleRequest,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> SessionResponse:
    return await SwitchRoleCommandHandler(container.identity_uow)(
        SwitchRoleCommand(session_id, body.role, context=context)
    )
