from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

import pytest

from goal_tracker.exceptions import (
    InvalidAmountError,
    NotAuthorizedError,
    NotFoundError,
)
from goal_tracker.models.analytics_event import AnalyticsEvent
from goal_tracker.services.contribution_service import (
    ContributionService,
    parse_contribution_amount,
)
from goal_tracker.services.goal_repository import SQLAlchemyGoalRepository
from tests.factories import RecordingDispatcher, create_goal, create_user

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0)


def _service(user, dispatcher=None) -> ContributionService:
    return ContributionService(
        user.id,
        dispatcher=dispatcher or RecordingDispatcher(),
        now_provider=lambda: FIXED_NOW,
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("10", Decimal("10.00")),
        (25.5, Decimal("25.50")),
        ("0.015", Decimal("0.02")),
        (Decimal("750"), Decimal("750.00")),
    ],
)
def test_parse_contribution_amount_accepts_positive_values(raw, expected) -> None:
    assert parse_contribution_amount(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [0, "-5", "abc", None, "NaN", "Infinity", "", "0.001", "0.004", "10000000000"],
)
def test_parse_contribution_amount_rejects_invalid_values(raw) -> None:
    with pytest.raises(InvalidAmountError):
        parse_contribution_amount(raw)


def test_contribution_completes_goal(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="1000.00", current_amount="250.00")
    dispatcher = RecordingDispatcher()

    updated = _service(user, dispatcher).add_contribution(goal.id, "750", "bonus")

    assert Decimal(str(updated.current_amount)) == Decimal("1000.00")
    assert updated.progress_percentage == 100
    assert updated.status == "completed"
    assert updated.completed_at is not None
    assert updated.achieved_milestones == {25, 50, 75, 100}
    assert [c.note for c in updated.contributions] == ["bonus"]
    assert updated.contributions[0].contributed_at == FIXED_NOW
    assert dispatcher.types() == ["goal_completed", "user_milestone"]
    assert dispatcher.milestones() == ["first_completion"]


def test_contribution_past_target_caps_percentage(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="100.00")

    updated = _service(user).add_contribution(goal.id, "150.00")

    assert Decimal(str(updated.current_amount)) == Decimal("150.00")
    assert updated.progress_percentage == 100


def test_completion_is_announced_only_once(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="100.00")
    dispatcher = RecordingDispatcher()
    service = _service(user, dispatcher)

    service.add_contribution(goal.id, "100")
    service.add_contribution(goal.id, "50")

    assert dispatcher.types().count("goal_completed") == 1
    assert goal.status == "completed"


def test_partial_contribution_records_milestones_without_completion(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="1000.00")
    dispatcher = RecordingDispatcher()

    _service(user, dispatcher).add_contribution(goal.id, "600")

    assert goal.progress_percentage == 60
    assert goal.achieved_milestones == {25, 50}
    assert goal.status == "active"
    assert dispatcher.events == []


@pytest.mark.parametrize("amount", [0, -5, "abc", "0.004"])
def test_invalid_amount_leaves_goal_unchanged(app_ctx, amount) -> None:
    user = create_user()
    goal = create_goal(user, current_amount="100.00")

    with pytest.raises(InvalidAmountError):
        _service(user).add_contribution(goal.id, amount)

    assert Decimal(str(goal.current_amount)) == Decimal("100.00")
    assert goal.contributions == []


def test_contribution_checks_existence_then_ownership(app_ctx) -> None:
    owner = create_user("owner")
    intruder = create_user("intruder")
    goal = create_goal(owner)

    with pytest.raises(NotFoundError):
        _service(intruder).add_contribution(uuid4(), "10")
    with pytest.raises(NotAuthorizedError):
        _service(intruder).add_contribution(goal.id, "10")
    with pytest.raises(NotAuthorizedError):
        _service(intruder).add_contribution(goal.id, "-1")
    assert Decimal(str(goal.current_amount)) == Decimal("0.00")


def test_contribution_is_tracked_in_analytics(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="200.00")

    _service(user).add_contribution(goal.id, "200")

    event_types = sorted(
        event.event_type
        for event in AnalyticsEvent.query.filter_by(user_id=user.id).all()
    )
    assert event_types == ["contribution_added", "goal_completed"]
    contribution = AnalyticsEvent.query.filter_by(
        user_id=user.id, event_type="contribution_added"
    ).one()
    assert contribution.event_data["amount"] == "200.00"
    assert contribution.event_data["progress"] == 100


def test_contribution_cannot_overflow_goal_balance(app_ctx) -> None:
    user = create_user()
    goal = create_goal(
        user, target_amount="9999999999.99", current_amount="9999999999.00"
    )

    with pytest.raises(InvalidAmountError):
        _service(user).add_contribution(goal.id, "1.00")

    assert Decimal(str(goal.current_amount)) == Decimal("9999999999.00")
    assert goal.contributions == []


class _LockRecordingRepository(SQLAlchemyGoalRepository):
    def __init__(self) -> None:
        self.locked_reads: list[bool] = []

    def find_by_id(self, goal_id, *, for_update=False):
        self.locked_reads.append(for_update)
        return super().find_by_id(goal_id, for_update=for_update)


def test_contribution_reads_goal_under_row_lock(app_ctx) -> None:
    user = create_user()
    goal = create_goal(user, target_amount="1000.00")
    repository = _LockRecordingRepository()
    service = ContributionService(
        user.id, repository=repository, dispatcher=RecordingDispatcher()
    )

    service.add_contribution(goal.id, "10")

    assert repository.locked_reads == [True]
