from __future__ import annotations

from datetime import datetime, timedelta
from types import SimpleNamespace

from goal_tracker.services.dashboard_service import (
    DashboardService,
    select_near_completion,
    select_recent_goals,
    serialize_dashboard,
)
from tests.factories import create_goal, create_user

BASE = datetime(2030, 1, 1)


def _goal(name: str, progress: int, status: str = "active", age: int = 0):
    return SimpleNamespace(
        name=name,
        progress_percentage=progress,
        status=status,
        created_at=BASE - timedelta(days=age),
    )


def test_recent_goals_are_active_newest_first_and_capped() -> None:
    goals = [_goal(f"g{age}", 10, age=age) for age in range(7)]
    goals.append(_goal("done", 100, status="completed", age=-1))

    recent = select_recent_goals(goals)

    assert [goal.name for goal in recent] == ["g0", "g1", "g2", "g3", "g4"]


def test_near_completion_filters_sorts_and_caps() -> None:
    goals = [
        _goal("low", 79),
        _goal("eighty", 80),
        _goal("ninety", 90),
        _goal("paused", 95, status="paused"),
        _goal("done", 100, status="completed"),
        _goal("a", 85),
        _goal("b", 86),
        _goal("c", 87),
        _goal("d", 99),
    ]

    near = select_near_completion(goals)

    assert [goal.name for goal in near] == ["d", "ninety", "c", "b", "a"]
    assert all(goal.progress_percentage >= 80 for goal in near)


def test_compose_dashboard_from_repository(app_ctx) -> None:
    user = create_user("dash")
    create_goal(
        user,
        name="Almost",
        target_amount="1000.00",
        current_amount="850.00",
        created_at=BASE,
    )
    create_goal(
        user,
        name="Fresh",
        target_amount="2000.00",
        timeframe="long",
        category="lifestyle",
        created_at=BASE + timedelta(days=1),
    )
    create_goal(user, name="Done", target_amount="10.00", current_amount="10.00")

    payload = serialize_dashboard(DashboardService().compose_dashboard(user.id))

    assert payload["overview"]["total_goals"] == 3
    assert payload["overview"]["completed_goals"] == 1
    assert payload["overview"]["total_saved"] == "860.00"
    assert payload["by_timeframe"]["long"]["count"] == 1
    assert payload["by_category"]["survival"]["count"] == 0
    assert [card["name"] for card in payload["recent_goals"]] == ["Fresh", "Almost"]
    assert [card["name"] for card in payload["near_completion"]] == ["Almost"]
    assert payload["near_completion"][0]["progress_percentage"] == 85
