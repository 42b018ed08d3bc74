from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, cast
from uuid import UUID

from sqlalchemy import inspect

from goal_tracker.extensions.database import db
from goal_tracker.models.goal import Goal
from goal_tracker.services.goal_progress_service import ProgressChange, apply_progress

_MONETARY_FIELDS = ("current_amount", "target_amount")


@dataclass(frozen=True)
class GoalFilters:
    timeframe: str | None = None
    category: str | None = None
    status: str | None = None

    def as_criteria(self) -> dict[str, str]:
        criteria = {
            "timeframe": self.timeframe,
            "category": self.category,
            "status": self.status,
        }
        return {key: value for key, value in criteria.items() if value}


NO_FILTERS = GoalFilters()


class GoalRepository(Protocol):
    def find_by_id(self, goal_id: UUID, *, for_update: bool = False) -> Goal | None:
        ...

    def find_by_owner(
        self,
        owner_id: UUID,
        filters: GoalFilters = NO_FILTERS,
        *,
        page: int = 1,
        per_page: int = 10,
    ) -> tuple[list[Goal], dict[str, int]]:
        ...

    def list_by_owner(
        self, owner_id: UUID, filters: GoalFilters = NO_FILTERS
    ) -> list[Goal]:
        ...

    def create(self, goal: Goal) -> ProgressChange:
        ...

    def save(self, goal: Goal) -> ProgressChange | None:
        ...

    def delete_by_id(self, goal_id: UUID) -> bool:
        ...

    def count_by_owner(self, owner_id: UUID, filters: GoalFilters = NO_FILTERS) -> int:
        ...

    def delete_all_by_owner(self, owner_id: UUID) -> int:
        ...


def _monetary_fields_changed(goal: Goal) -> bool:
    state = inspect(goal)
    if state.transient or state.pending:
        return True
    return any(state.attrs[field].history.has_changes() for field in _MONETARY_FIELDS)


def _pagination_meta(pagination: Any) -> dict[str, int]:
    return {
        "total": int(pagination.total or 0),
        "page": int(pagination.page),
        "per_page": int(pagination.per_page),
        "pages": int(pagination.pages),
    }


class SQLAlchemyGoalRepository:
    """Goal persistence on top of the Flask-SQLAlchemy session.

    ``create`` and ``save`` run the progress engine before committing when
    the amounts changed, so derived fields are never stale in storage.
    """

    def _owner_query(self, owner_id: UUID, filters: GoalFilters) -> Any:
        return Goal.query.filter_by(user_id=owner_id, **filters.as_criteria())

    def find_by_id(self, goal_id: UUID, *, for_update: bool = False) -> Goal | None:
        if not for_update:
            return cast(Goal | None, db.session.get(Goal, goal_id))
        # SELECT ... FOR UPDATE; reload so a cached instance sees the locked row
        return cast(
            Goal | None,
            db.session.get(
                Goal, goal_id, with_for_update=True, populate_existing=True
            ),
        )

    def find_by_owner(
        self,
        owner_id: UUID,
        filters: GoalFilters = NO_FILTERS,
        *,
        page: int = 1,
        per_page: int = 10,
    ) -> tuple[list[Goal], dict[str, int]]:
        pagination = (
            self._owner_query(owner_id, filters)
            .order_by(Goal.created_at.desc())
            .paginate(page=page, per_page=per_page, error_out=False)
        )
        return cast(list[Goal], pagination.items), _pagination_meta(pagination)

    def find_all(
        self,
        filters: GoalFilters = NO_FILTERS,
        *,
        owner_id: UUID | None = None,
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[list[Goal], dict[str, int]]:
        query = Goal.query.filter_by(**filters.as_criteria())
        if owner_id is not None:
            query = query.filter(Goal.user_id == owner_id)
        pagination = query.order_by(Goal.created_at.desc()).paginate(
            page=page, per_page=per_page, error_out=False
        )
        return cast(list[Goal], pagination.items), _pagination_meta(pagination)

    def list_by_owner(
        self, owner_id: UUID, filters: GoalFilters = NO_FILTERS
    ) -> list[Goal]:
        return cast(
            list[Goal],
            self._owner_query(owner_id, filters).order_by(Goal.created_at.desc()).all(),
        )

    def create(self, goal: Goal) -> ProgressChange:
        change = apply_progress(goal)
        db.session.add(goal)
        db.session.commit()
        return change

    def save(self, goal: Goal) -> ProgressChange | None:
        change = apply_progress(goal) if _monetary_fields_changed(goal) else None
        db.session.add(goal)
        db.session.commit()
        return change

    def delete_by_id(self, goal_id: UUID) -> bool:
        goal = self.find_by_id(goal_id)
        if goal is None:
            return False
        db.session.delete(goal)
        db.session.commit()
        return True

    def count_by_owner(self, owner_id: UUID, filters: GoalFilters = NO_FILTERS) -> int:
        return int(self._owner_query(owner_id, filters).count())

    def delete_all_by_owner(self, owner_id: UUID) -> int:
        goals = self._owner_query(owner_id, NO_FILTERS).all()
        for goal in goals:
            db.session.delete(goal)
        db.session.commit()
        return len(goals)
