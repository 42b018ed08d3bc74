from . import notification_resources as _notification_resources  # noqa: F401
from . import resources as _resources  # noqa: F401
from . import routes as _routes  # noqa: F401
from .blueprint import admin_bp
from .dependencies import (
    AdminDependencies,
    get_admin_dependencies,
    register_admin_dependencies,
)
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

__all__ = [
    "admin_bp",
    "AdminDependencies",
    "register_admin_dependencies",
    "get_admin_dependencies",
    "AdminUserCollectionResource",
    "AdminUserResource",
    "AdminGoalCollectionResource",
    "AdminGoalResource",
    "AdminStatsResource",
    "NotificationCollectionResource",
    "NotificationUnreadCountResource",
    "NotificationStatsResource",
    "NotificationMarkAllReadResource",
    "NotificationReadResource",
    "NotificationResource",
    "NotificationCleanupResource",
]
