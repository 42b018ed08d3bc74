from __future__ import annotations

from decimal import Decimal

from goal_tracker.extensions.database import db
from goal_tracker.models.goal import Goal, GoalContribution, GoalMilestone
from tests.factories import create_user


def test_goal_model_persists_with_defaults(app_ctx) -> None:
    user = create_user()
    goal = Goal(
        user_id=user.id,
        name="Emergency fund",
        category="survival",
        timeframe="short",
        target_amount=Decimal("10000.00"),
    )
    db.session.add(goal)
    db.session.commit()

    stored = db.session.get(Goal, goal.id)
    assert stored is not None
    assert stored.icon == "star"
    assert stored.status == "active"
    assert stored.currency_code == "USD"
    assert stored.currency_symbol == "$"
    assert stored.progress_percentage == 0
    assert Decimal(str(stored.current_amount)) == Decimal("0")
    assert stored.completed_at is None
    assert stored.started_at is not None
    assert stored.achieved_milestones == set()
    assert stored.user.id == user.id


def test_deleting_goal_removes_contributions_and_milestones(app_ctx) -> None:
    user = create_user()
    goal = Goal(
        user_id=user.id,
        name="Bike",
        category="lifestyle",
        timeframe="short",
        target_amount=Decimal("400.00"),
    )
    goal.contributions.append(GoalContribution(amount=Decimal("100.00")))
    goal.milestones.append(GoalMilestone(percentage=25))
    db.session.add(goal)
    db.session.commit()

    db.session.delete(goal)
    db.session.commit()

    assert GoalContribution.query.count() == 0
    assert GoalMilestone.query.count() == 0


def test_deleting_user_removes_goals(app_ctx) -> None:
    user = create_user()
    db.session.add(
        Goal(
            user_id=user.id,
            name="Car",
            category="necessity",
            timeframe="long",
            target_amount=Decimal("8000.00"),
        )
    )
    db.session.commit()

    db.session.delete(user)
    db.session.commit()

    assert Goal.query.count() == 0
