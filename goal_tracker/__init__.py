from apispec import APISpec
from apispec.ext.marshmallow import MarshmallowPlugin
from flask import Flask
from flask_apispec import FlaskApiSpec
from flask_jwt_extended import JWTManager
from flask_marshmallow import Marshmallow
from flask_migrate import Migrate

from goal_tracker.controllers.admin import (
    AdminGoalCollectionResource,
    AdminGoalResource,
    AdminStatsResource,
    AdminUserCollectionResource,
    AdminUserResource,
    NotificationCleanupResource,
    NotificationCollectionResource,
    NotificationMarkAllReadResource,
    NotificationReadResource,
    NotificationResource,
    NotificationStatsResource,
    NotificationUnreadCountResource,
    admin_bp,
    register_admin_dependencies,
)
from goal_tracker.controllers.analytics import (
    AnalyticsEventsResource,
    AnalyticsMetricsResource,
    analytics_bp,
    register_analytics_dependencies,
)
from goal_tracker.controllers.auth import (
    AuthResource,
    RegisterResource,
    auth_bp,
    register_auth_dependencies,
)
from goal_tracker.controllers.goal import (
    GoalCollectionResource,
    GoalContributionResource,
    GoalDashboardResource,
    GoalResource,
    goal_bp,
    register_goal_dependencies,
)
from goal_tracker.controllers.user import (
    UserMeResource,
    UserPasswordResource,
    register_user_dependencies,
    user_bp,
)
from goal_tracker.docs.api_documentation import API_INFO, TAGS
from goal_tracker.docs.schema_name_resolver import resolve_openapi_schema_name
from goal_tracker.extensions.database import db
from goal_tracker.extensions.error_handlers import register_error_handlers
from goal_tracker.extensions.jwt_callbacks import register_jwt_callbacks
from goal_tracker.extensions.notification_retention_cli import (
    register_notification_retention_commands,
)

jwt = JWTManager()
ma = Marshmallow()

_DOCUMENTED_RESOURCES = (
    (RegisterResource, "auth", "registerresource"),
    (AuthResource, "auth", "authresource"),
    (GoalCollectionResource, "goal", "goal_collection"),
    (GoalDashboardResource, "goal", "goal_dashboard"),
    (GoalResource, "goal", "goal_resource"),
    (GoalContributionResource, "goal", "goal_contribution"),
    (UserMeResource, "user", "user_me"),
    (UserPasswordResource, "user", "user_password"),
    (AnalyticsEventsResource, "analytics", "analytics_events"),
    (AnalyticsMetricsResource, "analytics", "analytics_metrics"),
    (AdminUserCollectionResource, "admin", "admin_users"),
    (AdminUserResource, "admin", "admin_user"),
    (AdminGoalCollectionResource, "admin", "admin_goals"),
    (AdminGoalResource, "admin", "admin_goal"),
    (AdminStatsResource, "admin", "admin_stats"),
    (NotificationCollectionResource, "admin", "admin_notifications"),
    (NotificationUnreadCountResource, "admin", "admin_notifications_unread_count"),
    (NotificationStatsResource, "admin", "admin_notifications_stats"),
    (NotificationMarkAllReadResource, "admin", "admin_notifications_mark_all_read"),
    (NotificationCleanupResource, "admin", "admin_notifications_cleanup"),
    (NotificationReadResource, "admin", "admin_notification_read"),
    (NotificationResource, "admin", "admin_notification"),
)


def _api_spec() -> APISpec:
    return APISpec(
        title=API_INFO["title"],
        version=API_INFO["version"],
        openapi_version="3.0.2",
        plugins=[MarshmallowPlugin(schema_name_resolver=resolve_openapi_schema_name)],
        info={
            "description": API_INFO["description"],
            "license": API_INFO["license"],
        },
        components={
            "securitySchemes": {
                "BearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "bearerFormat": "JWT",
                    "description": "Token returned by /auth/login",
                }
            }
        },
        tags=TAGS,
    )


def create_app() -> Flask:
    from config import Config, validate_security_configuration

    validate_security_configuration()

    app = Flask(__name__, instance_relative_config=True)
    app.config.from_object(Config)

    # Load FLASK_-prefixed environment overrides
    app.config.from_prefixed_env()

    db.init_app(app)
    ma.init_app(app)
    Migrate(app, db)
    jwt.init_app(app)

    # Import models so metadata knows every table before create_all
    from goal_tracker.models import (  # noqa: F401
        admin_notification,
        analytics_event,
        goal,
        user,
    )

    with app.app_context():
        db.create_all()

    app.config.update(
        {
            "APISPEC_SPEC": _api_spec(),
            "APISPEC_SWAGGER_URL": "/docs/swagger/",
            "APISPEC_SWAGGER_UI_URL": "/docs/",
            "APISPEC_OPTIONS": {"security": [{"BearerAuth": []}]},
        }
    )
    docs = FlaskApiSpec(app)

    register_error_handlers(app)
    register_jwt_callbacks(jwt)
    register_notification_retention_commands(app)

    register_auth_dependencies(app)
    register_goal_dependencies(app)
    register_user_dependencies(app)
    register_analytics_dependencies(app)
    register_admin_dependencies(app)

    # Blueprints must be registered before their resources are documented
    app.register_blueprint(auth_bp)
    app.register_blueprint(goal_bp)
    app.register_blueprint(user_bp)
    app.register_blueprint(analytics_bp)
    app.register_blueprint(admin_bp)

    for resource, blueprint, endpoint in _DOCUMENTED_RESOURCES:
        docs.register(resource, blueprint=blueprint, endpoint=endpoint)

    app.logger.info("app_created blueprints=%s", len(app.blueprints))
    return app


__all__ = ["create_app"]
