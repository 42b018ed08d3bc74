from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from marshmallow import Schema, ValidationError, fields, pre_load, validate, validates

from goal_tracker.models.goal import GOAL_CATEGORIES, GOAL_STATUSES, GOAL_TIMEFRAMES
from goal_tracker.schemas.sanitization import sanitize_string_fields
from goal_tracker.utils.currency import SUPPORTED_CURRENCY_CODES
from goal_tracker.utils.datetime_utils import utc_now_naive
from goal_tracker.utils.money import (
    MAX_MONEY_AMOUNT,
    MIN_POSITIVE_AMOUNT,
    MONEY_PLACES,
)

_LOWERCASE_FIELDS = ("category", "timeframe", "status")


def _normalize_goal_payload(data: Any) -> Any:
    sanitized = sanitize_string_fields(
        data,
        {"name", "description", "category", "timeframe", "status", "icon"},
    )
    if not isinstance(sanitized, dict):
        return sanitized
    for field_name in _LOWERCASE_FIELDS:
        if isinstance(sanitized.get(field_name), str):
            sanitized[field_name] = sanitized[field_name].lower()
    if isinstance(sanitized.get("currency_code"), str):
        sanitized["currency_code"] = sanitized["currency_code"].strip().upper()
    return sanitized


class GoalContributionSchema(Schema):
    class Meta:
        name = "GoalContribution"

    id = fields.UUID(dump_only=True)
    amount = fields.Decimal(as_string=True, required=True)
    note = fields.Str(load_default=None, validate=validate.Length(max=200))
    contributed_at = fields.DateTime(dump_only=True)

    @pre_load
    def sanitize_input(self, data: object, **kwargs: object) -> object:
        return sanitize_string_fields(data, {"note"})


class GoalMilestoneSchema(Schema):
    class Meta:
        name = "GoalMilestone"

    percentage = fields.Int(dump_only=True)
    achieved_at = fields.DateTime(dump_only=True)


class GoalSchema(Schema):
    class Meta:
        name = "Goal"

    id = fields.UUID(dump_only=True)
    user_id = fields.UUID(dump_only=True)
    name = fields.Str(required=True, validate=validate.Length(min=1, max=100))
    description = fields.Str(
        allow_none=True,
        validate=validate.Length(max=500),
    )
    category = fields.Str(required=True, validate=validate.OneOf(GOAL_CATEGORIES))
    timeframe = fields.Str(required=True, validate=validate.OneOf(GOAL_TIMEFRAMES))
    icon = fields.Str(load_default="star", validate=validate.Length(min=1, max=32))
    # Quantized to cents before the range validators run
    target_amount = fields.Decimal(
        as_string=True,
        required=True,
        places=MONEY_PLACES,
        rounding=ROUND_HALF_UP,
        validate=validate.Range(min=MIN_POSITIVE_AMOUNT, max=MAX_MONEY_AMOUNT),
    )
    current_amount = fields.Decimal(
        as_string=True,
        load_default=Decimal("0.00"),
        places=MONEY_PLACES,
        rounding=ROUND_HALF_UP,
        validate=validate.Range(min=0, max=MAX_MONEY_AMOUNT),
    )
    currency_code = fields.Str(validate=validate.OneOf(SUPPORTED_CURRENCY_CODES))
    currency_symbol = fields.Str(dump_only=True)
    progress_percentage = fields.Int(dump_only=True)
    progress_updated_at = fields.DateTime(dump_only=True)
    target_date = fields.Date(allow_none=True)
    started_at = fields.DateTime(dump_only=True)
    completed_at = fields.DateTime(dump_only=True)
    status = fields.Str(validate=validate.OneOf(GOAL_STATUSES))
    contributions = fields.List(
        fields.Nested(GoalContributionSchema), dump_only=True
    )
    milestones = fields.List(fields.Nested(GoalMilestoneSchema), dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)

    @pre_load
    def sanitize_input(self, data: object, **kwargs: object) -> object:
        return _normalize_goal_payload(data)

    @validates("target_date")
    def validate_target_date(self, value: date | None, **kwargs: object) -> None:
        if value is None:
            return
        if value <= utc_now_naive().date():
            raise ValidationError("Target date must be in the future.")


class GoalSummarySchema(Schema):
    """Lightweight shape used by list endpoints and the dashboard."""

    class Meta:
        name = "GoalSummary"

    id = fields.UUID(dump_only=True)
    name = fields.Str(dump_only=True)
    category = fields.Str(dump_only=True)
    timeframe = fields.Str(dump_only=True)
    icon = fields.Str(dump_only=True)
    target_amount = fields.Decimal(as_string=True, dump_only=True)
    current_amount = fields.Decimal(as_string=True, dump_only=True)
    currency_code = fields.Str(dump_only=True)
    currency_symbol = fields.Str(dump_only=True)
    progress_percentage = fields.Int(dump_only=True)
    status = fields.Str(dump_only=True)
    target_date = fields.Date(dump_only=True)
    completed_at = fields.DateTime(dump_only=True)
    created_at = fields.DateTime(dump_only=True)


class GoalListQuerySchema(Schema):
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    per_page = fields.Int(load_default=10, validate=validate.Range(min=1, max=100))
    timeframe = fields.Str(load_default=None, validate=validate.OneOf(GOAL_TIMEFRAMES))
    category = fields.Str(load_default=None, validate=validate.OneOf(GOAL_CATEGORIES))
    status = fields.Str(load_default=None, validate=validate.OneOf(GOAL_STATUSES))


class AdminGoalListQuerySchema(GoalListQuerySchema):
    per_page = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    user_id = fields.UUID(load_default=None)
