"""Notification endpoints. Listing and marking always act on the principal's inbox."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from auditoria.bootstrap import ApplicationContainer
from auditoria.core.context import RequestContext
from auditoria.modules.notifications.application.commands import (
    CreateNotificationCommand,
    CreateNotificationCommandHandler,
    MarkAllNotificationsReadCommand,
    MarkAllNotificationsReadCommandHandler,
    MarkNotificationReadCommand,
    MarkNotificationReadCommandHandler,
)
from auditoria.modules.notifications.application.dtos import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from auditoria.modules.notifications.application.queries import (
    GetUnreadCountQuery,
    GetUnreadCountQueryHandler,
    ListNotificationsQuery,
    ListNotificationsQueryHandler,
)
from auditoria.modules.notifications.presentation.schemas import CreateNotificationRequest
from auditoria.presentation.dependencies import (
    get_authenticated_context,
    get_container,
    require_permissions,
)
from auditoria.shared.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, PagedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.post("", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    body: CreateNotificationRequest,
    context: RequestContext = Depends(require_permissions("notifications:create")),
    container: ApplicationContainer = Depends(get_container),
) -> NotificationResponse:
    command = CreateNotificationCommand(
        recipient_id=body.recipient_id,
        title=body.title,
        message=body.message,
        notification_type=body.type,
        link=body.link,
        metadata=body.metadata,
        context=context,
    )
    return await CreateNotificationCommandHandler(container.notifications_uow)(command)


@router.get("", response_model=PagedResponse[NotificationResponse])
async def list_notifications(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    unread_only: bool = Query(False),
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> PagedResponse[NotificationResponse]:
    query = ListNotificationsQuery(
        page=page, page_size=page_size, unread_only=unread_only, context=context
    )
    return await ListNotificationsQueryHandler(container.notifications_uow)(query)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> UnreadCountResponse:
    return await GetUnreadCountQueryHandler(container.notifications_uow)(
        GetUnreadCountQuery(context=context)
    )


@router.post("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> MarkAllReadResponse:
    return await MarkAllNotificationsReadCommandHandler(container.notifications_uow)(
        MarkAllNotificationsReadCommand(context=context)
    )


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: UUID,
    context: RequestContext = Depends(get_authenticated_context),
    container: ApplicationContainer = Depends(get_container),
) -> NotificationResponse:
    return await MarkNotificationReadCommandHandler(container.notifications_uow)(
        MarkNotificationReadCommand(notification_id, context=context)
    )
