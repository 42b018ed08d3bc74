# mypy: disable-error-code=name-defined

from __future__ import annotations

import enum
from decimal import Decimal
from uuid import uuid4

from sqlalchemy.dialects.postgresql import UUID

from goal_tracker.extensions.database import db
from goal_tracker.utils.datetime_utils import utc_now_naive


class GoalCategory(str, enum.Enum):
    SURVIVAL = "survival"
    NECESSITY = "necessity"
    LIFESTYLE = "lifestyle"


class GoalTimeframe(str, enum.Enum):
    SHORT = "short"
    LONG = "long"


class GoalStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    PAUSED = "paused"
    CANCELLED = "cancelled"


GOAL_CATEGORIES = tuple(item.value for item in GoalCategory)
GOAL_TIMEFRAMES = tuple(item.value for item in GoalTimeframe)
GOAL_STATUSES = tuple(item.value for item in GoalStatus)


class Goal(db.Model):
    __tablename__ = "goals"

    id = db.Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    user_id = db.Column(
        UUID(as_uuid=True),
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.String(500), nullable=True)
    category = db.Column(db.String(16), nullable=False, index=True)
    timeframe = db.Column(db.String(8), nullable=False, index=True)
    icon = db.Column(db.String(32), nullable=False, default="star")

    current_amount = db.Column(
        db.Numeric(12, 2),
        nullable=False,
        default=Decimal("0"),
        server_default="0",
    )
    target_amount = db.Column(db.Numeric(12, 2), nullable=False)
    currency_code = db.Column(db.String(3), nullable=False, default="USD")
    currency_symbol = db.Column(db.String(4), nullable=False, default="$")

    progress_percentage = db.Column(
        db.Integer, nullable=False, default=0, server_default="0"
    )
    progress_updated_at = db.Column(db.DateTime, default=utc_now_naive)

    started_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)
    target_date = db.Column(db.Date, nullable=True)
    completed_at = db.Column(db.DateTime, nullable=True)

    status = db.Column(
        db.String(16),
        nullable=False,
        default=GoalStatus.ACTIVE.value,
        server_default=GoalStatus.ACTIVE.value,
        index=True,
    )

    created_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)
    updated_at = db.Column(
        db.DateTime,
        default=utc_now_naive,
        onupdate=utc_now_naive,
        nullable=False,
    )

    contributions = db.relationship(
        "GoalContribution",
        back_populates="goal",
        order_by="GoalContribution.contributed_at",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    milestones = db.relationship(
        "GoalMilestone",
        back_populates="goal",
        order_by="GoalMilestone.percentage",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        db.CheckConstraint("target_amount > 0", name="ck_goals_target_amount_pos"),
        db.CheckConstraint(
            "current_amount >= 0",
            name="ck_goals_current_amount_nonneg",
        ),
        db.CheckConstraint(
            "progress_percentage >= 0 AND progress_percentage <= 100",
            name="ck_goals_progress_percentage",
        ),
        db.Index("ix_goals_user_created_at", "user_id", "created_at"),
    )

    @property
    def achieved_milestones(self) -> set[int]:
        return {milestone.percentage for milestone in self.milestones}

    def __repr__(self) -> str:
        return (
            f"<Goal id={self.id} name={self.name!r} "
            f"target_amount={self.target_amount} status={self.status!r}>"
        )


class GoalContribution(db.Model):
    __tablename__ = "goal_contributions"

    id = db.Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    goal_id = db.Column(
        UUID(as_uuid=True),
        db.ForeignKey("goals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount = db.Column(db.Numeric(12, 2), nullable=False)
    note = db.Column(db.String(200), nullable=True)
    contributed_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)

    goal = db.relationship("Goal", back_populates="contributions")

    __table_args__ = (
        db.CheckConstraint("amount > 0", name="ck_goal_contributions_amount_pos"),
    )


class GoalMilestone(db.Model):
    __tablename__ = "goal_milestones"

    id = db.Column(UUID(as_uuid=True), primary_key=True, default=uuid4)
    goal_id = db.Column(
        UUID(as_uuid=True),
        db.ForeignKey("goals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    percentage = db.Column(db.Integer, nullable=False)
    achieved_at = db.Column(db.DateTime, default=utc_now_naive, nullable=False)

    goal = db.relationship("Goal", back_populates="milestones")

    __table_args__ = (
        db.UniqueConstraint(
            "goal_id", "percentage", name="uq_goal_milestones_goal_percentage"
        ),
    )
