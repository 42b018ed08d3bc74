from __future__ import annotations

from typing import Protocol, cast
from uuid import UUID

from goal_tracker.extensions.database import db
from goal_tracker.models.user import User


class UserDirectory(Protocol):
    def get_user(self, user_id: UUID) -> User | None:
        ...


class SQLAlchemyUserDirectory:
    """Read-only user lookup shared by the goal and contribution services."""

    def get_user(self, user_id: UUID) -> User | None:
        return cast(User | None, db.session.get(User, user_id))

    def find_by_email(self, email: str) -> User | None:
        return cast(User | None, User.query.filter_by(email=email.lower()).first())

    def find_by_username(self, username: str) -> User | None:
        return cast(User | None, User.query.filter_by(username=username).first())
