# mypy: disable-error-code=name-defined

from __future__ import annotations

import enum
import uuid

from sqlalchemy.dialects.postgresql import UUID

from goal_tracker.extensions.database import db
from goal_tracker.utils.datetime_utils import utc_now_naive


class NotificationType(str, enum.Enum):
    USER_REGISTERED = "user_registered"
    USER_FIRST_GOAL = "user_first_goal"
    USER_MILESTONE = "user_milestone"
    GOAL_COMPLETED = "goal_completed"
    GOAL_HIGH_VALUE = "goal_high_value"
    ADMIN_ACTION = "admin_action"
    SUSPICIOUS_ACTIVITY = "suspicious_activity"
    SYSTEM_ALERT = "system_alert"


class NotificationSeverity(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    CRITICAL = "critical"


NOTIFICATION_TYPES = tuple(item.value for item in NotificationType)
NOTIFICATION_SEVERITIES = tuple(item.value for item in NotificationSeverity)


class AdminNotification(db.Model):
    __tablename__ = "admin_notifications"
    __table_args__ = (
        db.Index("ix_admin_notifications_type_created_at", "type", "created_at"),
        db.Index("ix_admin_notifications_is_read_created_at", "is_read", "created_at"),
        db.Index(
            "ix_admin_notifications_severity_created_at", "severity", "created_at"
        ),
    )

    id = db.Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    type = db.Column(db.String(32), nullable=False)
    title = db.Column(db.String(128), nullable=False)
    message = db.Column(db.String(512), nullable=False)
    severity = db.Column(
        db.String(16),
        nullable=False,
        default=NotificationSeverity.INFO.value,
    )
    # Plain references, no FK: the feed outlives deleted users and goals
    user_id = db.Column(UUID(as_uuid=True), nullable=True)
    admin_id = db.Column(UUID(as_uuid=True), nullable=True)
    goal_id = db.Column(UUID(as_uuid=True), nullable=True)
    details = db.Column("metadata", db.JSON, nullable=False, default=dict)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    read_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now_naive)

    def mark_as_read(self) -> None:
        self.is_read = True
        self.read_at = utc_now_naive()

    def __repr__(self) -> str:
        return f"<AdminNotification type={self.type!r} severity={self.severity!r}>"
