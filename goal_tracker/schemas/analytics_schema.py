from marshmallow import Schema, fields, validate

from goal_tracker.models.analytics_event import ANALYTICS_EVENT_TYPES
from goal_tracker.services.analytics_service import ANALYTICS_PERIODS


class AnalyticsEventQuerySchema(Schema):
    limit = fields.Int(load_default=50, validate=validate.Range(min=1, max=100))
    event_type = fields.Str(
        load_default=None, validate=validate.OneOf(ANALYTICS_EVENT_TYPES)
    )


class AnalyticsMetricsQuerySchema(Schema):
    period = fields.Str(
        load_default="7days",
        validate=validate.OneOf(tuple(ANALYTICS_PERIODS)),
        metadata={"description": "Reporting window", "example": "30days"},
    )
