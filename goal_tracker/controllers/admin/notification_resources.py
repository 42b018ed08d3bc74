# mypy: disable-error-code=misc

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from flask_apispec import doc, use_kwargs
from flask_apispec.views import MethodResource

from goal_tracker.exceptions import NotFoundError
from goal_tracker.middleware.admin_guard import admin_required
from goal_tracker.models.admin_notification import AdminNotification
from goal_tracker.schemas.notification_schema import (
    NotificationCleanupSchema,
    NotificationListQuerySchema,
)
from goal_tracker.services.admin_notification_service import (
    NotificationFilters,
    SQLAlchemyNotificationSink,
    serialize_notification,
)
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_admin_dependencies

_NOTIFICATION_ID_PARAM = {
    "notification_id": {"in": "path", "type": "string", "required": True}
}


def _sink() -> SQLAlchemyNotificationSink:
    return get_admin_dependencies().notification_sink_factory()


def _get_notification(
    sink: SQLAlchemyNotificationSink, notification_id: UUID
) -> AdminNotification:
    notification = sink.get(notification_id)
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


class NotificationCollectionResource(MethodResource):
    @doc(
        description="Poll the admin notification feed.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Paginated notifications"},
            403: {"description": "Administrator access required"},
        },
    )
    @use_kwargs(NotificationListQuerySchema, location="query")
    @admin_required
    def get(
        self,
        page: int,
        per_page: int,
        type: str | None,
        severity: str | None,
        is_read: bool | None,
        start_date: datetime | None,
        end_date: datetime | None,
        order: str,
    ) -> Any:
        sink = _sink()
        notifications, pagination = sink.list_notifications(
            NotificationFilters(
                type=type,
                severity=severity,
                is_read=is_read,
                start_date=start_date,
                end_date=end_date,
            ),
            page=page,
            per_page=per_page,
            order=order,
        )
        return success_response(
            "Notifications listed successfully",
            {"items": [serialize_notification(item) for item in notifications]},
            meta={"pagination": pagination, "unread_count": sink.unread_count()},
        )


class NotificationUnreadCountResource(MethodResource):
    @doc(
        description="Number of unread notifications.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
    )
    @admin_required
    def get(self) -> Any:
        return success_response(
            "Unread count retrieved successfully",
            {"unread_count": _sink().unread_count()},
        )


class NotificationStatsResource(MethodResource):
    @doc(
        description="Totals by type and severity, unread and last 24 hours.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
    )
    @admin_required
    def get(self) -> Any:
        return success_response(
            "Notification statistics retrieved successfully", _sink().stats()
        )


class NotificationMarkAllReadResource(MethodResource):
    @doc(
        description="Mark every unread notification as read.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
    )
    @admin_required
    def post(self) -> Any:
        updated = _sink().mark_all_read()
        return success_response(
            "Notifications marked as read", {"updated_count": updated}
        )


class NotificationReadResource(MethodResource):
    @doc(
        description="Mark a single notification as read.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
        params=_NOTIFICATION_ID_PARAM,
        responses={404: {"description": "Notification not found"}},
    )
    @admin_required
    def post(self, notification_id: UUID) -> Any:
        sink = _sink()
        notification = sink.mark_read(_get_notification(sink, notification_id))
        return success_response(
            "Notification marked as read",
            {"notification": serialize_notification(notification)},
        )


class NotificationResource(MethodResource):
    @doc(
        description="Delete a single notification.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
        params=_NOTIFICATION_ID_PARAM,
        responses={404: {"description": "Notification not found"}},
    )
    @admin_required
    def delete(self, notification_id: UUID) -> Any:
        sink = _sink()
        sink.delete(_get_notification(sink, notification_id))
        return success_response("Notification deleted successfully", {})


class NotificationCleanupResource(MethodResource):
    @doc(
        description="Delete notifications older than the given number of days.",
        tags=["Admin notifications"],
        security=[{"BearerAuth": []}],
    )
    @use_kwargs(NotificationCleanupSchema, location="query")
    @admin_required
    def delete(self, days: int, only_read: bool) -> Any:
        deleted = _sink().delete_older_than(days, only_read=only_read)
        return success_response(
            "Old notifications deleted", {"deleted_count": deleted, "days": days}
        )
