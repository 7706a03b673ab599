"""
FastAPI dependencies shared by every router.

Requests authenticate with ``Authorization: Bearer <access token>``. The
token is resolved against the identity store on every request: the acting
role is the one recorded on the session, never a client supplied value.
"""

from collections.abc import Awaitable, Callable
from dataclasses import replace
from uuid import UUID, uuid4

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.core.errors import ForbiddenError, UnauthorizedError
from auditoria.core.logging import bind_request_context
from auditoria.modules.identity.application.queries.session import (
    ResolvePrincipalQuery,
    ResolvePrincipalQueryHandler,
)
from auditoria.modules.identity.domain.authorization import RolePermissionChecker
from auditoria.modules.identity.domain.enums import Role
from auditoria.modules.identity.domain.value_objects.permission import Permission

REQUEST_ID_HEADER = "X-Request-ID"

bearer_scheme = HTTPBearer(auto_error=False)


def get_container(request: Request) -> ApplicationContainer:
    return request.app.state.container


async def get_request_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> RequestContext:
    """Build the request context, resolving the principal when a bearer token is sent."""
    context = RequestContext(
        request_id=getattr(request.state, "request_id", None) or str(uuid4()),
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("User-Agent"),
    )
    bind_request_context(context)
    if credentials is None:
        return context

    container = get_container(request)
    handler = ResolvePrincipalQueryHandler(container.identity_uow, container.token_service())
    principal = await handler(ResolvePrincipalQuery(credentials.credentials, context=context))

    context = replace(
        context,
        user_id=principal.user_id,
        role=principal.role.value,
        session_id=principal.session_id,
    )
    bind_request_context(context)
    return context


async def get_authenticated_context(
    context: RequestContext = Depends(get_request_context),
) -> RequestContext:
    if not context.is_authenticated:
        raise UnauthorizedError("Authentication required", user_message="Autenticación requerida")
    return context


def principal_role(context: RequestContext) -> Role:
    """The role the principal acts with; unknown roles are rejected."""
    try:
        return Role(context.role)
    except ValueError as e:
        raise ForbiddenError(f"Unknown role: {context.role}") from e


def require_permissions(
    *permissions: str,
) -> Callable[[RequestContext], Awaitable[RequestContext]]:
    """
    Dependency factory requiring every permission in ``permissions``.

    Usage Example:
        @router.get("", dependencies=[Depends(require_permissions("users:read"))])
    """
    required = [Permission.from_string(value) for value in permissions]

    async def dependency(
        context: RequestContext = Depends(get_authenticated_context),
    ) -> RequestContext:
        role = principal_role(context)
        if not RolePermissionChecker.has_all_permissions(role, required):
            raise ForbiddenError(
                f"Role {role.value} lacks {', '.join(permissions)}",
                details={"required_permissions": list(permissions)},
            )
        return context

    return dependency


def ensure_self_or_permission(context: RequestContext, user_id: UUID, permission: str) -> None:
    """Allow acting on one's own account, otherwise require ``permission``."""
    if context.user_id == user_id:
        return
    if not RolePermissionChecker.has_permission(
        principal_role(context), Permission.from_string(permission)
    ):
        raise ForbiddenError(
            f"Role {context.role} lacks {permission}",
            details={"required_permissions": [permission]},
        )


__all__ = [
    "REQUEST_ID_HEADER",
    "bearer_scheme",
    "ensure_self_or_permission",
    "get_authenticated_context",
    "get_container",
    "get_request_context",
    "principal_role",
    "require_permissions",
]
