from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from goal_tracker.extensions.database import db
from goal_tracker.models.analytics_event import ANALYTICS_EVENT_TYPES, AnalyticsEvent
from goal_tracker.models.goal import GoalContribution
from goal_tracker.services import analytics_service
from tests.factories import create_goal, create_user

NOW = datetime(2024, 6, 15, 12, 0, 0)


def _record(user, event_type, *, days_ago=0):
    event = AnalyticsEvent(
        user_id=user.id,
        event_type=event_type,
        event_data={},
        created_at=NOW - timedelta(days=days_ago),
    )
    db.session.add(event)
    db.session.commit()
    return event


def _contribute(goal, amount, *, days_ago=0):
    db.session.add(
        GoalContribution(
            goal_id=goal.id,
            amount=Decimal(amount),
            contributed_at=NOW - timedelta(days=days_ago),
        )
    )
    db.session.commit()


def test_recent_events_filter_by_type_and_limit(app_ctx) -> None:
    user = create_user("saver")
    other = create_user("other")
    _record(user, "goal_created", days_ago=3)
    _record(user, "goal_created", days_ago=1)
    _record(user, "contribution_added", days_ago=2)
    _record(other, "goal_created")

    created = analytics_service.recent_events_for_user(
        user.id, event_type="goal_created"
    )
    latest = analytics_service.recent_events_for_user(user.id, limit=2)

    assert [event.created_at for event in created] == [
        NOW - timedelta(days=1),
        NOW - timedelta(days=3),
    ]
    assert [event.event_type for event in latest] == [
        "goal_created",
        "contribution_added",
    ]


def test_user_metrics_counts_only_the_period(app_ctx) -> None:
    user = create_user("saver")
    _record(user, "goal_created", days_ago=1)
    _record(user, "goal_created", days_ago=20)
    _record(user, "contribution_added", days_ago=0)
    _record(create_user("other"), "goal_created")

    metrics = analytics_service.user_metrics(user.id, now_provider=lambda: NOW)

    assert metrics["period"]["name"] == "7days"
    assert metrics["total_events"] == 2
    assert set(metrics["events_by_type"]) == set(ANALYTICS_EVENT_TYPES)
    assert metrics["events_by_type"]["goal_created"] == 1
    assert metrics["events_by_type"]["contribution_added"] == 1
    assert metrics["events_by_type"]["goal_deleted"] == 0

    monthly = analytics_service.user_metrics(
        user.id, period="30days", now_provider=lambda: NOW
    )
    assert monthly["events_by_type"]["goal_created"] == 2


def test_daily_activity_spans_the_last_week(app_ctx) -> None:
    user = create_user("saver")
    _record(user, "goal_created", days_ago=0)
    _record(user, "goal_updated", days_ago=0)
    _record(user, "goal_updated", days_ago=6)
    _record(user, "goal_updated", days_ago=7)

    activity = analytics_service.user_metrics(user.id, now_provider=lambda: NOW)[
        "daily_activity"
    ]

    assert len(activity) == 7
    assert activity[0] == {"date": "2024-06-09", "count": 1}
    assert activity[-1] == {"date": "2024-06-15", "count": 2}
    assert sum(day["count"] for day in activity) == 3


def test_goal_outcomes_and_contributions(app_ctx) -> None:
    user = create_user("saver")
    first = create_goal(user, name="Trip")
    create_goal(user, name="Car")
    create_goal(user, name="Laptop", current_amount="1000.00")
    _contribute(first, "10.50", days_ago=1)
    _contribute(first, "4.25", days_ago=2)
    _contribute(first, "99.00", days_ago=40)
    create_goal(create_user("other"), current_amount="1000.00")

    metrics = analytics_service.user_metrics(user.id, now_provider=lambda: NOW)

    assert metrics["goals"] == {
        "total": 3,
        "active": 2,
        "completed": 1,
        "success_rate": 33.33,
    }
    assert metrics["contributions"] == {"count": 2, "total_amount": "14.75"}


def test_metrics_for_a_user_without_activity(app_ctx) -> None:
    user = create_user("saver")

    metrics = analytics_service.user_metrics(user.id, now_provider=lambda: NOW)

    assert metrics["total_events"] == 0
    assert metrics["goals"]["success_rate"] == 0.0
    assert metrics["contributions"] == {"count": 0, "total_amount": "0.00"}
