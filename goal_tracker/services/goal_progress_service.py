"""Progress engine for savings goals.

Percentage, milestone and completion rules live here as plain functions so
they can be exercised without a database. ``apply_progress`` is the single
place that writes derived state onto a ``Goal``; the goal repository calls it
right before persisting whenever the monetary fields changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Iterable

from goal_tracker.models.goal import Goal, GoalMilestone, GoalStatus
from goal_tracker.utils.datetime_utils import utc_now_naive
from goal_tracker.utils.money import to_decimal

MILESTONE_THRESHOLDS: tuple[int, ...] = (25, 50, 75, 100)
COMPLETION_PERCENTAGE = 100

_HUNDRED = Decimal("100")


def round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def ratio_percentage(
    current: Decimal | int | float | str | None,
    target: Decimal | int | float | str | None,
) -> int:
    """``round(current / target * 100)`` without the 100 cap; 0 when target <= 0."""
    target_amount = to_decimal(target)
    if target_amount <= 0:
        return 0
    return round_half_up(to_decimal(current) / target_amount * _HUNDRED)


def compute_progress_percentage(
    current: Decimal | int | float | str | None,
    target: Decimal | int | float | str | None,
) -> int:
    return max(min(ratio_percentage(current, target), COMPLETION_PERCENTAGE), 0)


@dataclass(frozen=True)
class ProgressEvaluation:
    percentage: int
    new_milestones: tuple[int, ...]
    completes_goal: bool


@dataclass(frozen=True)
class ProgressChange:
    previous_status: str
    status: str
    percentage: int
    new_milestones: tuple[int, ...]

    @property
    def just_completed(self) -> bool:
        return (
            self.previous_status != GoalStatus.COMPLETED.value
            and self.status == GoalStatus.COMPLETED.value
        )


def evaluate_progress(
    *,
    current_amount: Decimal | int | float | str | None,
    target_amount: Decimal | int | float | str | None,
    status: str,
    achieved_milestones: Iterable[int] = (),
) -> ProgressEvaluation:
    percentage = compute_progress_percentage(current_amount, target_amount)
    already_achieved = set(achieved_milestones)
    new_milestones = tuple(
        threshold
        for threshold in MILESTONE_THRESHOLDS
        if percentage >= threshold and threshold not in already_achieved
    )
    completes_goal = (
        percentage >= COMPLETION_PERCENTAGE and status == GoalStatus.ACTIVE.value
    )
    return ProgressEvaluation(
        percentage=percentage,
        new_milestones=new_milestones,
        completes_goal=completes_goal,
    )


def apply_progress(
    goal: Goal,
    *,
    now_provider: Callable[[], datetime] | None = None,
) -> ProgressChange:
    now = (now_provider or utc_now_naive)()
    previous_status = goal.status or GoalStatus.ACTIVE.value
    evaluation = evaluate_progress(
        current_amount=goal.current_amount,
        target_amount=goal.target_amount,
        status=previous_status,
        achieved_milestones=goal.achieved_milestones,
    )

    goal.progress_percentage = evaluation.percentage
    goal.progress_updated_at = now
    for threshold in evaluation.new_milestones:
        goal.milestones.append(GoalMilestone(percentage=threshold, achieved_at=now))

    if evaluation.completes_goal:
        goal.status = GoalStatus.COMPLETED.value
        if goal.completed_at is None:
            goal.completed_at = now

    return ProgressChange(
        previous_status=previous_status,
        status=goal.status or previous_status,
        percentage=evaluation.percentage,
        new_milestones=evaluation.new_milestones,
    )
