# mypy: disable-error-code=name-defined

import enum
import uuid

from sqlalchemy.dialects.postgresql import UUID

from goal_tracker.extensions.database import db
from goal_tracker.utils.datetime_utils import utc_now_naive


class UserRole(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"


USER_ROLES = tuple(item.value for item in UserRole)


class User(db.Model):
    __tablename__ = "users"
    id = db.Column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, nullable=False
    )
    username = db.Column(db.String(30), nullable=False, unique=True)
    email = db.Column(db.String(128), nullable=False, unique=True)
    password = db.Column(db.String(256), nullable=False)
    role = db.Column(
        db.String(16),
        nullable=False,
        default=UserRole.USER.value,
        server_default=UserRole.USER.value,
    )
    created_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)
    updated_at = db.Column(
        db.DateTime, default=utc_now_naive, onupdate=utc_now_naive, nullable=False
    )

    # Default currency applied to new goals
    currency_code = db.Column(db.String(3), nullable=False, default="USD")
    currency_symbol = db.Column(db.String(4), nullable=False, default="$")

    goals = db.relationship(
        "Goal",
        backref="user",
        lazy=True,
        cascade="all, delete-orphan",
    )
    analytics_events = db.relationship(
        "AnalyticsEvent",
        backref="user",
        lazy=True,
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.username}>"
