from __future__ import annotations

from .blueprint import analytics_bp
from .resources import AnalyticsEventsResource, AnalyticsMetricsResource

_ROUTES_REGISTERED = False


def register_analytics_routes() -> None:
    global _ROUTES_REGISTERED
    if _ROUTES_REGISTERED:
        return

    analytics_bp.add_url_rule(
        "/events",
        view_func=AnalyticsEventsResource.as_view("analytics_events"),
        methods=["GET"],
    )
    analytics_bp.add_url_rule(
        "/metrics",
        view_func=AnalyticsMetricsResource.as_view("analytics_metrics"),
        methods=["GET"],
    )
    _ROUTES_REGISTERED = True


register_analytics_routes()
