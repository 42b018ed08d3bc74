"""
Marshmallow schemas for request validation, response serialization and the
OpenAPI document.

- Auth: login credentials and token payload
- User: registration, self-service and admin updates, public user shape
- Goal: goals, contributions, milestones and list filters
- Notification: admin feed filters and cleanup
- Analytics: event history and metrics filters
- Error: standard error envelope
"""

from .analytics_schema import AnalyticsEventQuerySchema, AnalyticsMetricsQuerySchema
from .auth_schema import AuthSchema, AuthSuccessResponseSchema
from .error_schema import ErrorResponseSchema
from .goal_schema import (
    AdminGoalListQuerySchema,
    GoalContributionSchema,
    GoalListQuerySchema,
    GoalMilestoneSchema,
    GoalSchema,
    GoalSummarySchema,
)
from .notification_schema import NotificationCleanupSchema, NotificationListQuerySchema
from .user_schemas import (
    AdminUserListQuerySchema,
    AdminUserUpdateSchema,
    ChangePasswordSchema,
    UserProfileUpdateSchema,
    UserRegistrationSchema,
    UserSchema,
)

__all__ = [
    # Auth schemas
    "AuthSchema",
    "AuthSuccessResponseSchema",
    # User schemas
    "UserRegistrationSchema",
    "AdminUserUpdateSchema",
    "UserProfileUpdateSchema",
    "ChangePasswordSchema",
    "UserSchema",
    # Goal schemas
    "GoalSchema",
    "GoalSummarySchema",
    "GoalContributionSchema",
    "GoalMilestoneSchema",
    "GoalListQuerySchema",
    # Admin schemas
    "AdminUserListQuerySchema",
    "AdminGoalListQuerySchema",
    "NotificationListQuerySchema",
    "NotificationCleanupSchema",
    # Analytics schemas
    "AnalyticsEventQuerySchema",
    "AnalyticsMetricsQuerySchema",
    # Error schemas
    "ErrorResponseSchema",
]
