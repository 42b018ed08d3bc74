from __future__ import annotations

from .blueprint import goal_bp
from .resources import (
    GoalCollectionResource,
    GoalContributionResource,
    GoalDashboardResource,
    GoalResource,
)

_ROUTES_REGISTERED = False


def register_goal_routes() -> None:
    global _ROUTES_REGISTERED
    if _ROUTES_REGISTERED:
        return

    goal_bp.add_url_rule(
        "",
        view_func=GoalCollectionResource.as_view("goal_collection"),
        methods=["GET", "POST", "DELETE"],
    )
    goal_bp.add_url_rule(
        "/dashboard",
        view_func=GoalDashboardResource.as_view("goal_dashboard"),
        methods=["GET"],
    )
    goal_bp.add_url_rule(
        "/<uuid:goal_id>",
        view_func=GoalResource.as_view("goal_resource"),
        methods=["GET", "PUT", "DELETE"],
    )
    goal_bp.add_url_rule(
        "/<uuid:goal_id>/contribute",
        view_func=GoalContributionResource.as_view("goal_contribution"),
        methods=["POST"],
    )

    _ROUTES_REGISTERED = True


register_goal_routes()
