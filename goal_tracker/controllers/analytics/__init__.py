from . import resources as _resources  # noqa: F401
from . import routes as _routes  # noqa: F401
from .blueprint import analytics_bp
from .dependencies import (
    AnalyticsDependencies,
    get_analytics_dependencies,
    register_analytics_dependencies,
)
from .resources import AnalyticsEventsResource, AnalyticsMetricsResource

__all__ = [
    "analytics_bp",
    "AnalyticsDependencies",
    "register_analytics_dependencies",
    "get_analytics_dependencies",
    "AnalyticsEventsResource",
    "AnalyticsMetricsResource",
]
