from __future__ import annotations

from dataclasses import dataclass
from typing import Any, cast
from uuid import UUID

from flask import current_app
from marshmallow import ValidationError
from sqlalchemy import func, or_

from goal_tracker.exceptions import (
    InvalidOperationError,
    NotFoundError,
    ValidationAPIError,
)
from goal_tracker.extensions.database import db
from goal_tracker.models.goal import GOAL_CATEGORIES, GOAL_TIMEFRAMES, Goal, GoalStatus
from goal_tracker.models.user import User, UserRole
from goal_tracker.schemas.goal_schema import GoalSchema
from goal_tracker.schemas.user_schemas import AdminUserUpdateSchema, UserSchema
from goal_tracker.services import analytics_service
from goal_tracker.services.goal_repository import (
    GoalFilters,
    SQLAlchemyGoalRepository,
)
from goal_tracker.services.goal_service import apply_goal_changes, emit_completion
from goal_tracker.services.goal_statistics_service import (
    aggregate_goal_statistics,
    serialize_statistics,
)
from goal_tracker.services.notification_service import (
    EventEmitter,
    NotificationDispatcher,
    admin_action,
)
from goal_tracker.services.user_directory import SQLAlchemyUserDirectory
from goal_tracker.services.user_service import (
    apply_account_changes,
    ensure_unique_account_fields,
)
from goal_tracker.utils.datetime_utils import naive_cutoff
from goal_tracker.utils.money import format_money, to_decimal

NEW_USER_WINDOW_DAYS = 7
ANALYTICS_WINDOW_DAYS = 7


class AdminService:
    """Platform-wide management on behalf of the administrator ``admin``.

    Every mutation is followed by an ``admin_action`` notification so the
    feed keeps a trail of what administrators changed.
    """

    def __init__(
        self,
        admin: User,
        *,
        repository: SQLAlchemyGoalRepository | None = None,
        dispatcher: EventEmitter | None = None,
        directory: SQLAlchemyUserDirectory | None = None,
    ) -> None:
        self.admin = admin
        self._repository = repository or SQLAlchemyGoalRepository()
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._directory = directory or SQLAlchemyUserDirectory()
        self._user_update_schema = AdminUserUpdateSchema()
        self._user_schema = UserSchema()
        self._goal_schema = GoalSchema()

    def _get_user(self, user_id: UUID) -> User:
        user = self._directory.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def _get_goal(self, goal_id: UUID) -> Goal:
        goal = self._repository.find_by_id(goal_id)
        if goal is None:
            raise NotFoundError("Goal not found")
        return goal

    def _goal_counts_by_user(self, user_ids: list[UUID]) -> dict[Any, dict[str, Any]]:
        if not user_ids:
            return {}
        rows = (
            db.session.query(
                Goal.user_id,
                func.count(Goal.id),
                func.coalesce(func.sum(Goal.current_amount), 0),
            )
            .filter(Goal.user_id.in_(user_ids))
            .group_by(Goal.user_id)
            .all()
        )
        completed = dict(
            db.session.query(Goal.user_id, func.count(Goal.id))
            .filter(
                Goal.user_id.in_(user_ids),
                Goal.status == GoalStatus.COMPLETED.value,
            )
            .group_by(Goal.user_id)
            .all()
        )
        return {
            user_id: {
                "total_goals": int(count),
                "completed_goals": int(completed.get(user_id, 0)),
                "total_saved": format_money(saved),
            }
            for user_id, count, saved in rows
        }

    def serialize_user(self, user: User) -> dict[str, Any]:
        return cast(dict[str, Any], self._user_schema.dump(user))

    def serialize_goal(self, goal: Goal) -> dict[str, Any]:
        return cast(dict[str, Any], self._goal_schema.dump(goal))

    def list_users(
        self,
        *,
        page: int = 1,
        per_page: int = 20,
        search: str | None = None,
        role: str | None = None,
    ) -> tuple[list[dict[str, Any]], dict[str, int]]:
        query = User.query
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(
                or_(User.username.ilike(pattern), User.email.ilike(pattern))
            )
        if role:
            query = query.filter(User.role == role)
        pagination = query.order_by(User.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )
        users = cast(list[User], pagination.items)
        stats = self._goal_counts_by_user([user.id for user in users])
        empty = {"total_goals": 0, "completed_goals": 0, "total_saved": "0.00"}
        items = [
            {**self.serialize_user(user), "stats": stats.get(user.id, empty)}
            for user in users
        ]
        return items, {
            "total": int(pagination.total or 0),
            "page": int(pagination.page),
            "per_page": int(pagination.per_page),
            "pages": int(pagination.pages),
        }

    def get_user_details(self, user_id: UUID) -> dict[str, Any]:
        user = self._get_user(user_id)
        goals = self._repository.list_by_owner(user.id)
        events = analytics_service.recent_events_for_user(user.id, limit=20)
        return {
            "user": self.serialize_user(user),
            "goals": [self.serialize_goal(goal) for goal in goals],
            "recent_activity": [
                analytics_service.serialize_analytics_event(event) for event in events
            ],
            "stats": serialize_statistics(aggregate_goal_statistics(goals)),
        }

    def update_user(self, user_id: UUID, payload: dict[str, Any]) -> User:
        user = self._get_user(user_id)
        try:
            validated = self._user_update_schema.load(payload)
        except ValidationError as exc:
            raise ValidationAPIError(details={"messages": exc.messages}) from exc

        ensure_unique_account_fields(self._directory, user, validated)

        previous_role = user.role
        apply_account_changes(user, validated)
        db.session.commit()

        role_changed = user.role != previous_role
        if role_changed and user.role == UserRole.ADMIN.value:
            action = "user_promoted"
        elif role_changed:
            action = "user_demoted"
        else:
            action = "user_updated"
        current_app.logger.info(
            "admin_user_updated admin_id=%s user_id=%s action=%s",
            self.admin.id,
            user.id,
            action,
        )
        details: dict[str, Any] = {"changes": sorted(payload)}
        if role_changed:
            details.update(
                role_changed=True, previous_role=previous_role, new_role=user.role
            )
        self._dispatcher.emit(admin_action(self.admin, action, user, details))
        return user

    def delete_user(self, user_id: UUID) -> dict[str, Any]:
        user = self._get_user(user_id)
        if str(user.id) == str(self.admin.id):
            raise InvalidOperationError("You cannot delete your own account")

        goal_count = self._repository.count_by_owner(user.id)
        snapshot = {
            "deleted_email": user.email,
            "deleted_username": user.username,
            "goals_deleted": goal_count,
        }
        target = _DeletedUser(id=user.id, username=user.username, email=user.email)
        db.session.delete(user)
        db.session.commit()
        current_app.logger.warning(
            "admin_user_deleted admin_id=%s user_id=%s goals=%s",
            self.admin.id,
            user_id,
            goal_count,
        )
        self._dispatcher.emit(
            admin_action(self.admin, "user_deleted", target, dict(snapshot))
        )
        return snapshot

    def list_goals(
        self,
        *,
        page: int = 1,
        per_page: int = 20,
        user_id: UUID | None = None,
        category: str | None = None,
        timeframe: str | None = None,
        status: str | None = None,
    ) -> tuple[list[dict[str, Any]], dict[str, int]]:
        goals, pagination = self._repository.find_all(
            GoalFilters(timeframe=timeframe, category=category, status=status),
            owner_id=user_id,
            page=page,
            per_page=per_page,
        )
        items = []
        for goal in goals:
            owner = goal.user
            items.append(
                {
                    **self.serialize_goal(goal),
                    "owner": {
                        "id": str(owner.id),
                        "username": owner.username,
                        "email": owner.email,
                    }
                    if owner is not None
                    else None,
                }
            )
        return items, pagination

    def update_goal(self, goal_id: UUID, payload: dict[str, Any]) -> Goal:
        goal = self._get_goal(goal_id)
        try:
            validated = self._goal_schema.load(payload, partial=True)
        except ValidationError as exc:
            raise ValidationAPIError(
                "Invalid goal data", details={"messages": exc.messages}
            ) from exc

        changes = sorted(validated)
        previous_status = goal.status
        apply_goal_changes(goal, validated)
        self._repository.save(goal)
        current_app.logger.info(
            "admin_goal_updated admin_id=%s goal_id=%s", self.admin.id, goal.id
        )
        self._dispatcher.emit(
            admin_action(self.admin, "goal_updated", goal, {"changes": changes})
        )
        if (
            previous_status != GoalStatus.COMPLETED.value
            and goal.status == GoalStatus.COMPLETED.value
        ):
            emit_completion(
                self._repository,
                self._dispatcher,
                self._directory.get_user(goal.user_id),
                goal,
            )
        return goal

    def delete_goal(self, goal_id: UUID) -> dict[str, Any]:
        goal = self._get_goal(goal_id)
        target = _DeletedGoal(id=goal.id, user_id=goal.user_id, name=goal.name)
        owner = goal.user
        details = {
            "goal_name": goal.name,
            "owner_username": owner.username if owner is not None else None,
            "target_amount": format_money(goal.target_amount),
        }
        self._repository.delete_by_id(goal.id)
        current_app.logger.warning(
            "admin_goal_deleted admin_id=%s goal_id=%s", self.admin.id, goal_id
        )
        self._dispatcher.emit(admin_action(self.admin, "goal_deleted", target, details))
        return {"deleted_goal": target.name}

    def platform_stats(self) -> dict[str, Any]:
        total_users = int(User.query.count())
        admins = int(User.query.filter_by(role=UserRole.ADMIN.value).count())
        new_users = int(
            User.query.filter(
                User.created_at >= naive_cutoff(days=NEW_USER_WINDOW_DAYS)
            ).count()
        )

        by_status = dict(
            db.session.query(Goal.status, func.count(Goal.id))
            .group_by(Goal.status)
            .all()
        )
        by_category = {category: 0 for category in GOAL_CATEGORIES}
        for category, count in (
            db.session.query(Goal.category, func.count(Goal.id))
            .group_by(Goal.category)
            .all()
        ):
            by_category[category] = int(count)
        by_timeframe = {timeframe: 0 for timeframe in GOAL_TIMEFRAMES}
        for timeframe, count in (
            db.session.query(Goal.timeframe, func.count(Goal.id))
            .group_by(Goal.timeframe)
            .all()
        ):
            by_timeframe[timeframe] = int(count)

        total_saved, total_target = db.session.query(
            func.coalesce(func.sum(Goal.current_amount), 0),
            func.coalesce(func.sum(Goal.target_amount), 0),
        ).one()

        return {
            "users": {
                "total": total_users,
                "admins": admins,
                "regular": total_users - admins,
                "new_last_7_days": new_users,
            },
            "goals": {
                "total": int(sum(by_status.values())),
                "active": int(by_status.get(GoalStatus.ACTIVE.value, 0)),
                "completed": int(by_status.get(GoalStatus.COMPLETED.value, 0)),
                "paused": int(by_status.get(GoalStatus.PAUSED.value, 0)),
                "by_category": by_category,
                "by_timeframe": by_timeframe,
            },
            "amounts": {
                "total_saved": format_money(to_decimal(total_saved)),
                "total_target": format_money(to_decimal(total_target)),
            },
            "analytics": {
                "events_last_7_days": analytics_service.count_events_since(
                    days=ANALYTICS_WINDOW_DAYS
                ),
            },
        }


@dataclass(frozen=True)
class _DeletedUser:
    """Detached stand-in for a user row that no longer exists."""

    id: UUID
    username: str
    email: str


@dataclass(frozen=True)
class _DeletedGoal:
    id: UUID
    user_id: UUID
    name: str
