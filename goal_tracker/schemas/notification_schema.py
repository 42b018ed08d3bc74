from marshmallow import Schema, fields, validate

from goal_tracker.models.admin_notification import (
    NOTIFICATION_SEVERITIES,
    NOTIFICATION_TYPES,
)
from goal_tracker.services.admin_notification_service import DEFAULT_RETENTION_DAYS


class NotificationListQuerySchema(Schema):
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    per_page = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    type = fields.Str(load_default=None, validate=validate.OneOf(NOTIFICATION_TYPES))
    severity = fields.Str(
        load_default=None, validate=validate.OneOf(NOTIFICATION_SEVERITIES)
    )
    is_read = fields.Bool(load_default=None)
    start_date = fields.DateTime(load_default=None)
    end_date = fields.DateTime(load_default=None)
    order = fields.Str(load_default="desc", validate=validate.OneOf(("asc", "desc")))


class NotificationCleanupSchema(Schema):
    days = fields.Int(
        load_default=DEFAULT_RETENTION_DAYS, validate=validate.Range(min=1)
    )
    only_read = fields.Bool(load_default=True)
