from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Sequence
from uuid import UUID

from goal_tracker.models.goal import (
    GOAL_CATEGORIES,
    GOAL_TIMEFRAMES,
    GoalStatus,
)
from goal_tracker.services.goal_progress_service import ratio_percentage
from goal_tracker.services.goal_repository import (
    NO_FILTERS,
    GoalFilters,
    GoalRepository,
    SQLAlchemyGoalRepository,
)
from goal_tracker.utils.money import format_money, to_decimal


@dataclass(frozen=True)
class BucketStatistics:
    count: int = 0
    target_amount: Decimal = Decimal("0")
    current_amount: Decimal = Decimal("0")
    progress: int = 0


@dataclass(frozen=True)
class GoalStatistics:
    total_goals: int
    active_goals: int
    completed_goals: int
    paused_goals: int
    total_target_amount: Decimal
    total_current_amount: Decimal
    overall_progress: int
    by_timeframe: dict[str, BucketStatistics] = field(default_factory=dict)
    by_category: dict[str, BucketStatistics] = field(default_factory=dict)


def _bucket(goals: Sequence[Any]) -> BucketStatistics:
    zero = Decimal("0")
    target_sum = sum((to_decimal(goal.target_amount) for goal in goals), zero)
    current_sum = sum((to_decimal(goal.current_amount) for goal in goals), zero)
    return BucketStatistics(
        count=len(goals),
        target_amount=target_sum,
        current_amount=current_sum,
        progress=ratio_percentage(current_sum, target_sum),
    )


def _count_status(goals: Sequence[Any], status: GoalStatus) -> int:
    return sum(1 for goal in goals if goal.status == status.value)


def aggregate_goal_statistics(goals: Iterable[Any]) -> GoalStatistics:
    """Roll up an already-filtered goal collection.

    Every timeframe and category key is present in the breakdowns, zeroed
    when no goal falls into it.
    """
    items = list(goals)
    overall = _bucket(items)
    by_timeframe = {
        timeframe: _bucket([goal for goal in items if goal.timeframe == timeframe])
        for timeframe in GOAL_TIMEFRAMES
    }
    by_category = {
        category: _bucket([goal for goal in items if goal.category == category])
        for category in GOAL_CATEGORIES
    }
    return GoalStatistics(
        total_goals=overall.count,
        active_goals=_count_status(items, GoalStatus.ACTIVE),
        completed_goals=_count_status(items, GoalStatus.COMPLETED),
        paused_goals=_count_status(items, GoalStatus.PAUSED),
        total_target_amount=overall.target_amount,
        total_current_amount=overall.current_amount,
        overall_progress=overall.progress,
        by_timeframe=by_timeframe,
        by_category=by_category,
    )


def serialize_bucket(bucket: BucketStatistics) -> dict[str, Any]:
    return {
        "count": bucket.count,
        "target_amount": format_money(bucket.target_amount),
        "current_amount": format_money(bucket.current_amount),
        "progress": bucket.progress,
    }


def serialize_statistics(statistics: GoalStatistics) -> dict[str, Any]:
    return {
        "total_goals": statistics.total_goals,
        "active_goals": statistics.active_goals,
        "completed_goals": statistics.completed_goals,
        "paused_goals": statistics.paused_goals,
        "total_target_amount": format_money(statistics.total_target_amount),
        "total_current_amount": format_money(statistics.total_current_amount),
        "overall_progress": statistics.overall_progress,
        "by_timeframe": {
            key: serialize_bucket(value)
            for key, value in statistics.by_timeframe.items()
        },
        "by_category": {
            key: serialize_bucket(value)
            for key, value in statistics.by_category.items()
        },
    }


class GoalStatisticsService:
    def __init__(self, repository: GoalRepository | None = None) -> None:
        self._repository = repository or SQLAlchemyGoalRepository()

    def compute_statistics(
        self,
        user_id: UUID,
        filters: GoalFilters = NO_FILTERS,
    ) -> GoalStatistics:
        goals = self._repository.list_by_owner(user_id, filters)
        return aggregate_goal_statistics(goals)
