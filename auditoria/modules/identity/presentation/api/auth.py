"""Login, token refresh and logout endpoints."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.identity.application.commands.auth import (
    LoginCommand,
    LoginCommandHandler,
    LogoutAllCommand,
    LogoutAllCommandHandler,
    LogoutCommand,
    LogoutCommandHandler,
    RefreshSessionCommand,
    RefreshSessionCommandHandler,
)
from auditoria.modules.identity.application.dtos import LoginResponse, SessionTokensResponse
from auditoria.modules.identity.presentation.schemas import LoginRequest, RefreshSessionRequest
from auditoria.presentation.dependencies import (
    get_authenticated_context,
    get_container,
    get_request_context,
)

router = APIRouter(prefix="/auth", tags=["auth"])


class LogoutAllResponse(BaseModel):
    sessions_closed: int


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    context: RequestContext = Depends(get_request_context),
    container: ApplicationContainer = Depends(get_container),
) -> LoginResponse:
    handler = LoginCommandHandler(
        container.identity_uow,
        container.password_hasher(),
        container.token_service(),
        container.login_policy(),
    )
    return await handler(
        LoginCommand(body.username, body.password, role=body.role, context=context)
    )


@router.post("/refresh", response_model=SessionTokensResponse)
async def refresh(
    body: RefreshSessionRequest,
    context: RequestContext = Depends(get_request_context),
    container: ApplicationContainer = Depends(get_container),
) -> SessionTokensResponse:
    handler = RefreshSessionCommandHandler(container.identity_uow, container.token_service())
    return await handler(RefreshSessionCommand(body.refresh_token, context=context))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> None:
    await LogoutCommandHandler(container.identity_uow)(LogoutCommand(context=context))


@router.post("/logout-all", response_model=LogoutAllResponse)
async def logout_all(
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> LogoutAllResponse:
    handler = LogoutAllCommandHandler(container.identity_uow)
    closed = await handler(LogoutAllCommand(context=context))
    return LogoutAllResponse(sessions_closed=closed)
