from __future__ import annotations

from typing import Any, cast
from uuid import UUID

from flask import current_app
from marshmallow import ValidationError

from goal_tracker.exceptions import (
    InvalidOperationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationAPIError,
)
from goal_tracker.models.goal import Goal, GoalStatus
from goal_tracker.models.user import User
from goal_tracker.schemas.goal_schema import GoalSchema
from goal_tracker.services import analytics_service
from goal_tracker.services.goal_repository import (
    GoalFilters,
    GoalRepository,
    SQLAlchemyGoalRepository,
)
from goal_tracker.services.goal_statistics_service import (
    GoalStatistics,
    GoalStatisticsService,
)
from goal_tracker.services.notification_service import (
    EventEmitter,
    NotificationDispatcher,
    completion_events,
    goal_created_events,
    goal_high_value,
    is_high_value_goal,
)
from goal_tracker.services.user_directory import SQLAlchemyUserDirectory, UserDirectory
from goal_tracker.utils.currency import symbol_for
from goal_tracker.utils.datetime_utils import utc_now_naive
from goal_tracker.utils.money import format_money, to_decimal

COMPLETED_FILTER = GoalFilters(status=GoalStatus.COMPLETED.value)


def get_owned_goal(
    repository: GoalRepository,
    goal_id: UUID,
    owner_id: UUID,
    *,
    for_update: bool = False,
) -> Goal:
    goal = repository.find_by_id(goal_id, for_update=for_update)
    if goal is None:
        raise NotFoundError("Goal not found")
    if str(goal.user_id) != str(owner_id):
        raise NotAuthorizedError("You do not have access to this goal")
    return goal


def emit_completion(
    repository: GoalRepository,
    dispatcher: EventEmitter,
    owner: User | None,
    goal: Goal,
) -> None:
    """Notify admins of a fresh completion and record it in analytics."""
    if owner is not None:
        completed_count = repository.count_by_owner(goal.user_id, COMPLETED_FILTER)
        for event in completion_events(owner, goal, completed_count):
            dispatcher.emit(event)
    analytics_service.track_event(
        goal.user_id,
        "goal_completed",
        {"goal_id": str(goal.id), "target_amount": format_money(goal.target_amount)},
    )


def apply_goal_changes(goal: Goal, validated: dict[str, Any]) -> None:
    """Copy a validated partial payload onto ``goal``.

    Completion is one-way: a completed goal cannot be moved back to another
    status, while setting ``completed`` by hand stamps ``completed_at``.
    """
    requested_status = validated.get("status")
    if (
        requested_status is not None
        and goal.status == GoalStatus.COMPLETED.value
        and requested_status != GoalStatus.COMPLETED.value
    ):
        raise InvalidOperationError("A completed goal cannot change status")

    currency_code = validated.pop("currency_code", None)
    if currency_code:
        goal.currency_code = currency_code
        goal.currency_symbol = symbol_for(currency_code)

    for field, value in validated.items():
        setattr(goal, field, value)

    if requested_status == GoalStatus.COMPLETED.value and goal.completed_at is None:
        goal.completed_at = utc_now_naive()


class GoalService:
    def __init__(
        self,
        user_id: UUID,
        *,
        repository: GoalRepository | None = None,
        dispatcher: EventEmitter | None = None,
        directory: UserDirectory | None = None,
    ) -> None:
        self.user_id = user_id
        self._repository = repository or SQLAlchemyGoalRepository()
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._directory = directory or SQLAlchemyUserDirectory()
        self._statistics = GoalStatisticsService(self._repository)
        self._schema = GoalSchema()

    def _owner(self) -> User | None:
        return self._directory.get_user(self.user_id)

    def create_goal(self, payload: dict[str, Any]) -> Goal:
        try:
            validated = self._schema.load(payload)
        except ValidationError as exc:
            raise ValidationAPIError(
                "Invalid goal data",
                details={"messages": exc.messages},
            ) from exc

        owner = self._owner()
        if owner is None:
            raise NotFoundError("User not found")

        validated.pop("status", None)
        currency_code = validated.pop("currency_code", None) or owner.currency_code
        goal = Goal(
            user_id=self.user_id,
            currency_code=currency_code,
            currency_symbol=symbol_for(currency_code),
            status=GoalStatus.ACTIVE.value,
            started_at=utc_now_naive(),
            **validated,
        )
        change = self._repository.create(goal)
        current_app.logger.info(
            "goal_created goal_id=%s user_id=%s", goal.id, self.user_id
        )

        goal_count = self._repository.count_by_owner(self.user_id)
        self._dispatcher.emit_all(goal_created_events(owner, goal, goal_count))
        analytics_service.track_event(
            self.user_id,
            "goal_created",
            {
                "goal_id": str(goal.id),
                "category": goal.category,
                "timeframe": goal.timeframe,
                "target_amount": format_money(goal.target_amount),
            },
        )
        if change.just_completed:
            emit_completion(self._repository, self._dispatcher, owner, goal)
        return goal

    def list_goals(
        self,
        *,
        page: int = 1,
        per_page: int = 10,
        timeframe: str | None = None,
        category: str | None = None,
        status: str | None = None,
    ) -> tuple[list[Goal], dict[str, int], GoalStatistics]:
        filters = GoalFilters(timeframe=timeframe, category=category, status=status)
        goals, pagination = self._repository.find_by_owner(
            self.user_id, filters, page=page, per_page=per_page
        )
        statistics = self._statistics.compute_statistics(self.user_id, filters)
        return goals, pagination, statistics

    def get_goal(self, goal_id: UUID) -> Goal:
        return get_owned_goal(self._repository, goal_id, self.user_id)

    def update_goal(self, goal_id: UUID, payload: dict[str, Any]) -> Goal:
        goal = self.get_goal(goal_id)
        try:
            validated = self._schema.load(payload, partial=True)
        except ValidationError as exc:
            raise ValidationAPIError(
                "Invalid goal data",
                details={"messages": exc.messages},
            ) from exc

        changed_fields = sorted(validated)
        previous_status = goal.status
        previous_target = to_decimal(goal.target_amount)
        apply_goal_changes(goal, validated)
        self._repository.save(goal)

        owner = self._owner()
        target_changed = to_decimal(goal.target_amount) != previous_target
        if owner is not None and target_changed and is_high_value_goal(goal):
            self._dispatcher.emit(goal_high_value(owner, goal))
        if (
            previous_status != GoalStatus.COMPLETED.value
            and goal.status == GoalStatus.COMPLETED.value
        ):
            emit_completion(self._repository, self._dispatcher, owner, goal)
        analytics_service.track_event(
            self.user_id,
            "goal_updated",
            {"goal_id": str(goal.id), "fields": changed_fields},
        )
        return goal

    def delete_goal(self, goal_id: UUID) -> None:
        goal = self.get_goal(goal_id)
        name = goal.name
        self._repository.delete_by_id(goal.id)
        current_app.logger.info(
            "goal_deleted goal_id=%s user_id=%s", goal_id, self.user_id
        )
        analytics_service.track_event(
            self.user_id, "goal_deleted", {"goal_id": str(goal_id), "name": name}
        )

    def delete_all_goals(self) -> int:
        deleted = self._repository.delete_all_by_owner(self.user_id)
        current_app.logger.info(
            "goals_deleted user_id=%s count=%s", self.user_id, deleted
        )
        if deleted:
            analytics_service.track_event(
                self.user_id, "goal_deleted", {"count": deleted, "bulk": True}
            )
        return deleted

    def serialize(self, goal: Goal) -> dict[str, Any]:
        return cast(dict[str, Any], self._schema.dump(goal))
