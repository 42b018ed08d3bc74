from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Callable
from uuid import UUID

from flask import current_app

from goal_tracker.exceptions import InvalidAmountError
from goal_tracker.extensions.database import db
from goal_tracker.models.goal import Goal, GoalContribution
from goal_tracker.services import analytics_service
from goal_tracker.services.goal_repository import (
    GoalRepository,
    SQLAlchemyGoalRepository,
)
from goal_tracker.services.goal_service import emit_completion, get_owned_goal
from goal_tracker.services.notification_service import (
    EventEmitter,
    NotificationDispatcher,
)
from goal_tracker.services.user_directory import SQLAlchemyUserDirectory, UserDirectory
from goal_tracker.utils.datetime_utils import utc_now_naive
from goal_tracker.utils.money import (
    MAX_MONEY_AMOUNT,
    format_money,
    quantize_money,
    to_decimal,
)


def parse_contribution_amount(value: Any) -> Decimal:
    """Whole-cent contribution amount; values rounding to zero are rejected."""
    try:
        amount = quantize_money(value)
    except (InvalidOperation, ValueError) as exc:
        raise InvalidAmountError() from exc
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError()
    if amount > MAX_MONEY_AMOUNT:
        raise InvalidAmountError("Contribution amount is too large")
    return amount


class ContributionService:
    """Records money put toward a goal and lets the progress engine react."""

    def __init__(
        self,
        user_id: UUID,
        *,
        repository: GoalRepository | None = None,
        dispatcher: EventEmitter | None = None,
        directory: UserDirectory | None = None,
        now_provider: Callable[[], Any] = utc_now_naive,
    ) -> None:
        self.user_id = user_id
        self._repository = repository or SQLAlchemyGoalRepository()
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._directory = directory or SQLAlchemyUserDirectory()
        self._now = now_provider

    def add_contribution(
        self,
        goal_id: UUID,
        amount: Any,
        note: str | None = None,
    ) -> Goal:
        goal = get_owned_goal(
            self._repository, goal_id, self.user_id, for_update=True
        )
        try:
            contribution_amount = parse_contribution_amount(amount)
            new_balance = to_decimal(goal.current_amount) + contribution_amount
            if new_balance > MAX_MONEY_AMOUNT:
                raise InvalidAmountError("Goal balance would exceed the maximum amount")
        except InvalidAmountError:
            # Releases the row lock
            db.session.rollback()
            raise

        goal.current_amount = new_balance
        goal.contributions.append(
            GoalContribution(
                amount=contribution_amount,
                note=note,
                contributed_at=self._now(),
            )
        )
        change = self._repository.save(goal)
        current_app.logger.info(
            "contribution_added goal_id=%s amount=%s progress=%s",
            goal.id,
            contribution_amount,
            goal.progress_percentage,
        )

        analytics_service.track_event(
            self.user_id,
            "contribution_added",
            {
                "goal_id": str(goal.id),
                "amount": format_money(contribution_amount),
                "progress": goal.progress_percentage,
            },
        )
        if change is not None and change.just_completed:
            emit_completion(
                self._repository,
                self._dispatcher,
                self._directory.get_user(self.user_id),
                goal,
            )
        return goal
