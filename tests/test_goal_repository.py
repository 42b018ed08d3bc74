from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from sqlalchemy import update

from goal_tracker.extensions.database import db
from goal_tracker.models.goal import Goal
from goal_tracker.services.goal_repository import (
    GoalFilters,
    SQLAlchemyGoalRepository,
)
from tests.factories import create_goal, create_user

BASE = datetime(2026, 1, 1, 9, 0, 0)


def test_create_applies_progress(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="1000.00", current_amount="500.00")

    assert goal.progress_percentage == 50
    assert goal.achieved_milestones == {25, 50}


def test_save_only_recomputes_when_amounts_change(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="1000.00", current_amount="100.00")
    repository = SQLAlchemyGoalRepository()

    goal.name = "Renamed"
    assert repository.save(goal) is None

    goal.current_amount = Decimal("800.00")
    change = repository.save(goal)
    assert change is not None
    assert change.percentage == 80
    assert change.new_milestones == (25, 50, 75)
    assert not change.just_completed

    goal.target_amount = Decimal("800.00")
    change = repository.save(goal)
    assert change is not None
    assert change.just_completed
    assert goal.status == "completed"


def test_find_by_owner_paginates_newest_first(app_ctx) -> None:
    user = create_user()
    for index in range(5):
        create_goal(user, name=f"Goal {index}", created_at=BASE + timedelta(days=index))
    repository = SQLAlchemyGoalRepository()

    goals, pagination = repository.find_by_owner(user.id, page=1, per_page=2)
    assert [goal.name for goal in goals] == ["Goal 4", "Goal 3"]
    assert pagination == {"total": 5, "page": 1, "per_page": 2, "pages": 3}

    goals, _ = repository.find_by_owner(user.id, page=3, per_page=2)
    assert [goal.name for goal in goals] == ["Goal 0"]


def test_filters_and_counts(app_ctx) -> None:
    user = create_user()
    other = create_user("other")
    create_goal(user, name="Short", timeframe="short", category="survival")
    create_goal(user, name="Long", timeframe="long", category="survival")
    create_goal(user, name="Done", current_amount="1000.00")
    create_goal(other, name="Foreign", timeframe="long")
    repository = SQLAlchemyGoalRepository()

    long_goals = repository.list_by_owner(user.id, GoalFilters(timeframe="long"))
    assert [goal.name for goal in long_goals] == ["Long"]
    assert repository.count_by_owner(user.id) == 3
    assert repository.count_by_owner(user.id, GoalFilters(category="survival")) == 2
    assert repository.count_by_owner(user.id, GoalFilters(status="completed")) == 1

    all_long, pagination = repository.find_all(GoalFilters(timeframe="long"))
    assert {goal.name for goal in all_long} == {"Long", "Foreign"}
    assert pagination["total"] == 2


def test_goal_filters_drop_unset_criteria() -> None:
    filters = GoalFilters(category="survival", status="active")

    assert filters.as_criteria() == {"category": "survival", "status": "active"}
    assert GoalFilters().as_criteria() == {}


def test_delete_by_id_and_delete_all_by_owner(app_ctx) -> None:
    user = create_user()
    other = create_user("other")
    first = create_goal(user, name="One")
    create_goal(user, name="Two")
    create_goal(other, name="Foreign")
    repository = SQLAlchemyGoalRepository()

    assert repository.delete_by_id(first.id) is True
    assert repository.delete_by_id(first.id) is False
    assert repository.delete_all_by_owner(user.id) == 1
    assert repository.count_by_owner(user.id) == 0
    assert repository.count_by_owner(other.id) == 1


def test_locked_read_reloads_a_cached_goal(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, current_amount="10.00")
    repository = SQLAlchemyGoalRepository()
    assert Decimal(str(goal.current_amount)) == Decimal("10.00")

    db.session.execute(
        update(Goal)
        .where(Goal.id == goal.id)
        .values(current_amount=Decimal("40.00")),
        execution_options={"synchronize_session": False},
    )

    cached = repository.find_by_id(goal.id)
    assert Decimal(str(cached.current_amount)) == Decimal("10.00")
    locked = repository.find_by_id(goal.id, for_update=True)
    assert locked is goal
    assert Decimal(str(locked.current_amount)) == Decimal("40.00")
