from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, cast
from uuid import UUID

from sqlalchemy import func

from goal_tracker.extensions.database import db
from goal_tracker.models.admin_notification import (
    NOTIFICATION_SEVERITIES,
    NOTIFICATION_TYPES,
    AdminNotification,
)
from goal_tracker.utils.datetime_utils import (
    isoformat_or_none,
    naive_cutoff,
    utc_now_naive,
)

DEFAULT_RETENTION_DAYS = 30


@dataclass(frozen=True)
class NotificationDraft:
    type: str
    title: str
    message: str
    severity: str
    user_id: UUID | None = None
    admin_id: UUID | None = None
    goal_id: UUID | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationFilters:
    type: str | None = None
    severity: str | None = None
    is_read: bool | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class NotificationSink(Protocol):
    def append(self, draft: NotificationDraft) -> AdminNotification:
        ...


class SQLAlchemyNotificationSink:
    def append(self, draft: NotificationDraft) -> AdminNotification:
        notification = AdminNotification(
            type=draft.type,
            title=draft.title,
            message=draft.message,
            severity=draft.severity,
            user_id=draft.user_id,
            admin_id=draft.admin_id,
            goal_id=draft.goal_id,
            details=dict(draft.metadata),
        )
        try:
            db.session.add(notification)
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        return notification

    def list_notifications(
        self,
        filters: NotificationFilters | None = None,
        *,
        page: int = 1,
        per_page: int = 20,
        order: str = "desc",
    ) -> tuple[list[AdminNotification], dict[str, int]]:
        filters = filters or NotificationFilters()
        query = AdminNotification.query
        if filters.type:
            query = query.filter(AdminNotification.type == filters.type)
        if filters.severity:
            query = query.filter(AdminNotification.severity == filters.severity)
        if filters.is_read is not None:
            query = query.filter(AdminNotification.is_read.is_(filters.is_read))
        if filters.start_date is not None:
            query = query.filter(AdminNotification.created_at >= filters.start_date)
        if filters.end_date is not None:
            query = query.filter(AdminNotification.created_at <= filters.end_date)

        ordering = (
            AdminNotification.created_at.asc()
            if order == "asc"
            else AdminNotification.created_at.desc()
        )
        pagination = query.order_by(ordering).paginate(
            page=page, per_page=per_page, error_out=False
        )
        return cast(list[AdminNotification], pagination.items), {
            "total": int(pagination.total or 0),
            "page": int(pagination.page),
            "per_page": int(pagination.per_page),
            "pages": int(pagination.pages),
        }

    def get(self, notification_id: UUID) -> AdminNotification | None:
        return cast(
            AdminNotification | None, db.session.get(AdminNotification, notification_id)
        )

    def unread_count(self) -> int:
        return int(AdminNotification.query.filter_by(is_read=False).count())

    def mark_read(self, notification: AdminNotification) -> AdminNotification:
        notification.mark_as_read()
        db.session.commit()
        return notification

    def mark_all_read(self) -> int:
        updated = AdminNotification.query.filter_by(is_read=False).update(
            {"is_read": True, "read_at": utc_now_naive()},
            synchronize_session=False,
        )
        db.session.commit()
        return int(updated)

    def delete(self, notification: AdminNotification) -> None:
        db.session.delete(notification)
        db.session.commit()

    def delete_older_than(self, days: int, *, only_read: bool = True) -> int:
        safe_days = max(int(days), 1)
        query = AdminNotification.query.filter(
            AdminNotification.created_at < naive_cutoff(days=safe_days)
        )
        if only_read:
            query = query.filter(AdminNotification.is_read.is_(True))
        deleted = query.delete(synchronize_session=False)
        db.session.commit()
        return int(deleted)

    def stats(self) -> dict[str, Any]:
        by_type = {notification_type: 0 for notification_type in NOTIFICATION_TYPES}
        for notification_type, count in (
            db.session.query(AdminNotification.type, func.count(AdminNotification.id))
            .group_by(AdminNotification.type)
            .all()
        ):
            by_type[notification_type] = int(count)

        by_severity = {severity: 0 for severity in NOTIFICATION_SEVERITIES}
        for severity, count in (
            db.session.query(
                AdminNotification.severity, func.count(AdminNotification.id)
            )
            .group_by(AdminNotification.severity)
            .all()
        ):
            by_severity[severity] = int(count)

        return {
            "total": int(AdminNotification.query.count()),
            "unread": self.unread_count(),
            "recent_24h": int(
                AdminNotification.query.filter(
                    AdminNotification.created_at >= naive_cutoff(days=1)
                ).count()
            ),
            "by_type": by_type,
            "by_severity": by_severity,
        }


def purge_read_notifications(*, retention_days: int) -> int:
    return SQLAlchemyNotificationSink().delete_older_than(retention_days)


def serialize_notification(notification: AdminNotification) -> dict[str, Any]:
    return {
        "id": str(notification.id),
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "severity": notification.severity,
        "user_id": str(notification.user_id) if notification.user_id else None,
        "admin_id": str(notification.admin_id) if notification.admin_id else None,
        "goal_id": str(notification.goal_id) if notification.goal_id else None,
        "metadata": notification.details or {},
        "is_read": bool(notification.is_read),
        "read_at": isoformat_or_none(notification.read_at),
        "created_at": isoformat_or_none(notification.created_at),
    }
