from __future__ import annotations

from collections import Counter
from datetime import datetime, time, timedelta
from typing import Any, Callable, cast
from uuid import UUID

from flask import current_app
from sqlalchemy import func

from goal_tracker.extensions.database import db
from goal_tracker.models.analytics_event import ANALYTICS_EVENT_TYPES, AnalyticsEvent
from goal_tracker.models.goal import Goal, GoalContribution, GoalStatus
from goal_tracker.utils.datetime_utils import (
    isoformat_or_none,
    naive_cutoff,
    utc_now_naive,
)
from goal_tracker.utils.money import format_money, to_decimal

ANALYTICS_PERIODS = {"7days": 7, "30days": 30, "90days": 90}
DAILY_ACTIVITY_DAYS = 7


def track_event(
    user_id: UUID,
    event_type: str,
    event_data: dict[str, Any] | None = None,
) -> AnalyticsEvent | None:
    if event_type not in ANALYTICS_EVENT_TYPES:
        raise ValueError(f"Unknown analytics event type: {event_type}")
    event = AnalyticsEvent(
        user_id=user_id,
        event_type=event_type,
        event_data=event_data or {},
    )
    try:
        db.session.add(event)
        db.session.commit()
    except Exception:
        db.session.rollback()
        current_app.logger.exception(
            "analytics_event_failed type=%s user_id=%s", event_type, user_id
        )
        return None
    return event


def recent_events_for_user(
    user_id: UUID,
    *,
    limit: int = 50,
    event_type: str | None = None,
) -> list[AnalyticsEvent]:
    query = AnalyticsEvent.query.filter_by(user_id=user_id)
    if event_type is not None:
        query = query.filter_by(event_type=event_type)
    return cast(
        list[AnalyticsEvent],
        query.order_by(AnalyticsEvent.created_at.desc()).limit(limit).all(),
    )


def count_events_since(*, days: int) -> int:
    return int(
        AnalyticsEvent.query.filter(
            AnalyticsEvent.created_at >= naive_cutoff(days=days)
        ).count()
    )


def _events_by_type(user_id: UUID, start: datetime, end: datetime) -> dict[str, int]:
    counts = {event_type: 0 for event_type in ANALYTICS_EVENT_TYPES}
    for event_type, count in (
        db.session.query(AnalyticsEvent.event_type, func.count(AnalyticsEvent.id))
        .filter(
            AnalyticsEvent.user_id == user_id,
            AnalyticsEvent.created_at >= start,
            AnalyticsEvent.created_at <= end,
        )
        .group_by(AnalyticsEvent.event_type)
        .all()
    ):
        counts[event_type] = int(count)
    return counts


def _daily_activity(user_id: UUID, end: datetime) -> list[dict[str, Any]]:
    first_day = end.date() - timedelta(days=DAILY_ACTIVITY_DAYS - 1)
    timestamps = (
        db.session.query(AnalyticsEvent.created_at)
        .filter(
            AnalyticsEvent.user_id == user_id,
            AnalyticsEvent.created_at >= datetime.combine(first_day, time.min),
            AnalyticsEvent.created_at <= end,
        )
        .all()
    )
    per_day = Counter(created_at.date() for (created_at,) in timestamps)
    days = [first_day + timedelta(days=offset) for offset in range(DAILY_ACTIVITY_DAYS)]
    return [{"date": day.isoformat(), "count": per_day.get(day, 0)} for day in days]


def _goal_outcomes(user_id: UUID) -> dict[str, Any]:
    by_status = dict(
        db.session.query(Goal.status, func.count(Goal.id))
        .filter(Goal.user_id == user_id)
        .group_by(Goal.status)
        .all()
    )
    total = int(sum(by_status.values()))
    completed = int(by_status.get(GoalStatus.COMPLETED.value, 0))
    return {
        "total": total,
        "active": int(by_status.get(GoalStatus.ACTIVE.value, 0)),
        "completed": completed,
        "success_rate": round(completed * 100 / total, 2) if total else 0.0,
    }


def _contributions(user_id: UUID, start: datetime, end: datetime) -> dict[str, Any]:
    count, total = (
        db.session.query(
            func.count(GoalContribution.id),
            func.coalesce(func.sum(GoalContribution.amount), 0),
        )
        .join(Goal, GoalContribution.goal_id == Goal.id)
        .filter(
            Goal.user_id == user_id,
            GoalContribution.contributed_at >= start,
            GoalContribution.contributed_at <= end,
        )
        .one()
    )
    return {"count": int(count), "total_amount": format_money(to_decimal(total))}


def user_metrics(
    user_id: UUID,
    *,
    period: str = "7days",
    now_provider: Callable[[], datetime] = utc_now_naive,
) -> dict[str, Any]:
    """Activity summary of one user over a reporting window.

    Event and contribution figures cover ``period``; goal outcomes are
    all-time and ``daily_activity`` always spans the last seven days.
    """
    end = now_provider()
    start = end - timedelta(days=ANALYTICS_PERIODS[period])
    events_by_type = _events_by_type(user_id, start, end)
    return {
        "period": {
            "name": period,
            "start": isoformat_or_none(start),
            "end": isoformat_or_none(end),
        },
        "total_events": sum(events_by_type.values()),
        "events_by_type": events_by_type,
        "daily_activity": _daily_activity(user_id, end),
        "goals": _goal_outcomes(user_id),
        "contributions": _contributions(user_id, start, end),
    }


def serialize_analytics_event(event: AnalyticsEvent) -> dict[str, Any]:
    return {
        "id": str(event.id),
        "event_type": event.event_type,
        "event_data": event.event_data or {},
        "created_at": isoformat_or_none(event.created_at),
    }
