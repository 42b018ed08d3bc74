from __future__ import annotations

from typing import Any, Callable
from uuid import UUID

from goal_tracker.services.contribution_service import ContributionService
from goal_tracker.services.dashboard_service import (
    DashboardService,
    serialize_dashboard,
)
from goal_tracker.services.goal_service import GoalService
from goal_tracker.services.goal_statistics_service import serialize_statistics


class GoalApplicationService:
    """Request-facing facade over the goal, contribution and dashboard services.

    Controllers talk to this class only; it turns domain objects into the
    JSON-ready payloads the HTTP layer returns. Domain errors propagate to
    the Flask error handlers untouched.
    """

    def __init__(
        self,
        *,
        user_id: UUID,
        goal_service_factory: Callable[[UUID], GoalService],
        contribution_service_factory: Callable[[UUID], ContributionService],
        dashboard_service_factory: Callable[[], DashboardService],
    ) -> None:
        self._user_id = user_id
        self._goal_service = goal_service_factory(user_id)
        self._contribution_service_factory = contribution_service_factory
        self._dashboard_service_factory = dashboard_service_factory

    @classmethod
    def with_defaults(cls, user_id: UUID) -> GoalApplicationService:
        return cls(
            user_id=user_id,
            goal_service_factory=GoalService,
            contribution_service_factory=ContributionService,
            dashboard_service_factory=DashboardService,
        )

    def create_goal(self, payload: dict[str, Any]) -> dict[str, Any]:
        goal = self._goal_service.create_goal(payload)
        return self._goal_service.serialize(goal)

    def list_goals(
        self,
        *,
        page: int,
        per_page: int,
        timeframe: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> dict[str, Any]:
        goals, pagination, statistics = self._goal_service.list_goals(
            page=page,
            per_page=per_page,
            timeframe=timeframe,
            category=category,
            status=status,
        )
        return {
            "items": [self._goal_service.serialize(goal) for goal in goals],
            "pagination": pagination,
            "statistics": serialize_statistics(statistics),
        }

    def get_goal(self, goal_id: UUID) -> dict[str, Any]:
        return self._goal_service.serialize(self._goal_service.get_goal(goal_id))

    def update_goal(self, goal_id: UUID, payload: dict[str, Any]) -> dict[str, Any]:
        goal = self._goal_service.update_goal(goal_id, payload)
        return self._goal_service.serialize(goal)

    def delete_goal(self, goal_id: UUID) -> None:
        self._goal_service.delete_goal(goal_id)

    def delete_all_goals(self) -> dict[str, Any]:
        return {"deleted_count": self._goal_service.delete_all_goals()}

    def add_contribution(
        self,
        goal_id: UUID,
        *,
        amount: Any,
        note: str | None = None,
    ) -> dict[str, Any]:
        contribution_service = self._contribution_service_factory(self._user_id)
        goal = contribution_service.add_contribution(goal_id, amount, note)
        return self._goal_service.serialize(goal)

    def get_dashboard(self) -> dict[str, Any]:
        dashboard_service = self._dashboard_service_factory()
        return serialize_dashboard(dashboard_service.compose_dashboard(self._user_id))
