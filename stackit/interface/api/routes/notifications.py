"""Notification routes.

All routes act on the authenticated user's own notifications.
"""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query
from fastapi.security import HTTPAuthorizationCredentials

from stackit.application.usecase.auth import GetCurrentUserUseCase
from stackit.application.usecase.notification import (
    BulkNotificationRequest,
    BulkNotificationResponse,
    DeleteAllNotificationsUseCase,
    DeleteNotificationResponse,
    DeleteNotificationUseCase,
    GetUnreadCountUseCase,
    ListNotificationsRequest,
    ListNotificationsResponse,
    ListNotificationsUseCase,
    MarkAllNotificationsReadUseCase,
    MarkNotificationReadUseCase,
    NotificationActionRequest,
    NotificationItem,
    UnreadCountRequest,
    UnreadCountResponse,
)
from stackit.interface.api.auth import bearer_scheme, require_user

router = APIRouter(
    prefix="/notifications", tags=["notifications"], route_class=DishkaRoute
)


@router.get("", response_model=ListNotificationsResponse)
async def list_notifications(
    list_notifications_use_case: FromDishka[ListNotificationsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    unread_only: bool = False,
) -> ListNotificationsResponse:
    """List the caller's notifications, newest first."""
    user = await require_user(credentials, get_current_user_use_case)
    return await list_notifications_use_case.execute(
        ListNotificationsRequest(
            user_id=user.user_id, page=page, limit=limit, unread_only=unread_only
        )
    )


@router.get("/count", response_model=UnreadCountResponse)
async def unread_count(
    unread_count_use_case: FromDishka[GetUnreadCountUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> UnreadCountResponse:
    """Number of unread notifications."""
    user = await require_user(credentials, get_current_user_use_case)
    return await unread_count_use_case.execute(UnreadCountRequest(user_id=user.user_id))


@router.put("/read-all", response_model=BulkNotificationResponse)
async def mark_all_read(
    mark_all_read_use_case: FromDishka[MarkAllNotificationsReadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> BulkNotificationResponse:
    """Mark all notifications as read."""
    user = await require_user(credentials, get_current_user_use_case)
    return await mark_all_read_use_case.execute(
        BulkNotificationRequest(user_id=user.user_id)
    )


@router.put("/{notification_id}/read", response_model=NotificationItem)
async def mark_read(
    notification_id: UUID,
    mark_read_use_case: FromDishka[MarkNotificationReadUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> NotificationItem:
    """Mark one notification as read. Other users' notifications are 404."""
    user = await require_user(credentials, get_current_user_use_case)
    return await mark_read_use_case.execute(
        NotificationActionRequest(
            notification_id=str(notification_id), user_id=user.user_id
        )
    )


@router.delete("/{notification_id}", response_model=DeleteNotificationResponse)
async def delete_notification(
    notification_id: UUID,
    delete_notification_use_case: FromDishka[DeleteNotificationUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> DeleteNotificationResponse:
    """Delete one notification."""
    user = await require_user(credentials, get_current_user_use_case)
    return await delete_notification_use_case.execute(
        NotificationActionRequest(
            notification_id=str(notification_id), user_id=user.user_id
        )
    )


@router.delete("", response_model=BulkNotificationResponse)
async def delete_all_notifications(
    delete_all_use_case: FromDishka[DeleteAllNotificationsUseCase],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> BulkNotificationResponse:
    """Delete all of the caller's notifications."""
    user = await require_user(credentials, get_current_user_use_case)
    return await delete_all_use_case.execute(
        BulkNotificationRequest(user_id=user.user_id)
    )
