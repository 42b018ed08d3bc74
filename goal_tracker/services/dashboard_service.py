from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, cast
from uuid import UUID

from goal_tracker.models.goal import Goal, GoalStatus
from goal_tracker.schemas.goal_schema import GoalSummarySchema
from goal_tracker.services.goal_repository import (
    NO_FILTERS,
    GoalRepository,
    SQLAlchemyGoalRepository,
)
from goal_tracker.services.goal_statistics_service import (
    GoalStatistics,
    aggregate_goal_statistics,
    serialize_bucket,
)
from goal_tracker.utils.money import format_money

RECENT_GOALS_LIMIT = 5
NEAR_COMPLETION_LIMIT = 5
NEAR_COMPLETION_THRESHOLD = 80


@dataclass(frozen=True)
class Dashboard:
    statistics: GoalStatistics
    recent_goals: tuple[Any, ...]
    near_completion: tuple[Any, ...]


def _active(goals: Iterable[Any]) -> list[Any]:
    return [goal for goal in goals if goal.status == GoalStatus.ACTIVE.value]


def select_recent_goals(
    goals: Iterable[Any], limit: int = RECENT_GOALS_LIMIT
) -> list[Any]:
    return sorted(_active(goals), key=lambda goal: goal.created_at, reverse=True)[
        :limit
    ]


def select_near_completion(
    goals: Iterable[Any],
    limit: int = NEAR_COMPLETION_LIMIT,
    threshold: int = NEAR_COMPLETION_THRESHOLD,
) -> list[Any]:
    candidates = [
        goal for goal in _active(goals) if goal.progress_percentage >= threshold
    ]
    return sorted(
        candidates, key=lambda goal: goal.progress_percentage, reverse=True
    )[:limit]


def build_dashboard(goals: Sequence[Any]) -> Dashboard:
    return Dashboard(
        statistics=aggregate_goal_statistics(goals),
        recent_goals=tuple(select_recent_goals(goals)),
        near_completion=tuple(select_near_completion(goals)),
    )


class DashboardService:
    def __init__(self, repository: GoalRepository | None = None) -> None:
        self._repository = repository or SQLAlchemyGoalRepository()

    def compose_dashboard(self, user_id: UUID) -> Dashboard:
        return build_dashboard(self._repository.list_by_owner(user_id, NO_FILTERS))


_CARD_SCHEMA = GoalSummarySchema()


def _goal_card(goal: Goal) -> dict[str, Any]:
    return cast(dict[str, Any], _CARD_SCHEMA.dump(goal))


def serialize_dashboard(dashboard: Dashboard) -> dict[str, Any]:
    statistics = dashboard.statistics
    return {
        "overview": {
            "total_goals": statistics.total_goals,
            "active_goals": statistics.active_goals,
            "completed_goals": statistics.completed_goals,
            "paused_goals": statistics.paused_goals,
            "total_saved": format_money(statistics.total_current_amount),
            "total_target": format_money(statistics.total_target_amount),
            "overall_progress": statistics.overall_progress,
        },
        "by_timeframe": {
            key: serialize_bucket(value)
            for key, value in statistics.by_timeframe.items()
        },
        "by_category": {
            key: serialize_bucket(value)
            for key, value in statistics.by_category.items()
        },
        "recent_goals": [_goal_card(goal) for goal in dashboard.recent_goals],
        "near_completion": [_goal_card(goal) for goal in dashboard.near_completion],
    }
