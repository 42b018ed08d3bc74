from __future__ import annotations

from .blueprint import admin_bp
from .notification_resources import (
    NotificationCleanupResource,
    NotificationCollectionResource,
    NotificationMarkAllReadResource,
    NotificationReadResource,
    NotificationResource,
    NotificationStatsResource,
    NotificationUnreadCountResource,
)
from .resources import (
    AdminGoalCollectionResource,
    AdminGoalResource,
    AdminStatsResource,
    AdminUserCollectionResource,
    AdminUserResource,
)

_ROUTES_REGISTERED = False


def register_admin_routes() -> None:
    global _ROUTES_REGISTERED
    if _ROUTES_REGISTERED:
        return

    admin_bp.add_url_rule(
        "/users",
        view_func=AdminUserCollectionResource.as_view("admin_users"),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/users/<uuid:user_id>",
        view_func=AdminUserResource.as_view("admin_user"),
        methods=["GET", "PUT", "DELETE"],
    )
    admin_bp.add_url_rule(
        "/goals",
        view_func=AdminGoalCollectionResource.as_view("admin_goals"),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/goals/<uuid:goal_id>",
        view_func=AdminGoalResource.as_view("admin_goal"),
        methods=["PUT", "DELETE"],
    )
    admin_bp.add_url_rule(
        "/stats",
        view_func=AdminStatsResource.as_view("admin_stats"),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/notifications",
        view_func=NotificationCollectionResource.as_view("admin_notifications"),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/notifications/unread-count",
        view_func=NotificationUnreadCountResource.as_view(
            "admin_notifications_unread_count"
        ),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/notifications/stats",
        view_func=NotificationStatsResource.as_view("admin_notifications_stats"),
        methods=["GET"],
    )
    admin_bp.add_url_rule(
        "/notifications/mark-all-read",
        view_func=NotificationMarkAllReadResource.as_view(
            "admin_notifications_mark_all_read"
        ),
        methods=["POST"],
    )
    admin_bp.add_url_rule(
        "/notifications/cleanup",
        view_func=NotificationCleanupResource.as_view("admin_notifications_cleanup"),
        methods=["DELETE"],
    )
    admin_bp.add_url_rule(
        "/notifications/<uuid:notification_id>/read",
        view_func=NotificationReadResource.as_view("admin_notification_read"),
        methods=["POST"],
    )
    admin_bp.add_url_rule(
        "/notifications/<uuid:notification_id>",
        view_func=NotificationResource.as_view("admin_notification"),
        methods=["DELETE"],
    )
    _ROUTES_REGISTERED = True


register_admin_routes()
