# mypy: disable-error-code=name-defined

from __future__ import annotations

import uuid

from sqlalchemy.dialects.postgresql import UUID

from goal_tracker.extensions.database import db
from goal_tracker.utils.datetime_utils import utc_now_naive

ANALYTICS_EVENT_TYPES = (
    "user_registered",
    "goal_created",
    "goal_updated",
    "goal_deleted",
    "goal_completed",
    "contribution_added",
    "profile_updated",
    "currency_changed",
)


class AnalyticsEvent(db.Model):
    __tablename__ = "analytics_events"
    __table_args__ = (
        db.Index("ix_analytics_events_type_created_at", "event_type", "created_at"),
        db.Index("ix_analytics_events_user_type", "user_id", "event_type"),
    )

    id = db.Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = db.Column(
        UUID(as_uuid=True),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    event_type = db.Column(db.String(32), nullable=False)
    event_data = db.Column(db.JSON, nullable=False, default=dict)
    created_at = db.Column(db.DateTime, nullable=False, default=utc_now_naive)
