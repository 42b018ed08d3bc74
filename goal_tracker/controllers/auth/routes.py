from __future__ import annotations

from .blueprint import auth_bp
from .resources import AuthResource, RegisterResource

_ROUTES_REGISTERED = False


def register_auth_routes() -> None:
    global _ROUTES_REGISTERED
    if _ROUTES_REGISTERED:
        return

    auth_bp.add_url_rule(
        "/register",
        view_func=RegisterResource.as_view("registerresource"),
        methods=["POST"],
    )
    auth_bp.add_url_rule(
        "/login",
        view_func=AuthResource.as_view("authresource"),
        methods=["POST"],
    )
    _ROUTES_REGISTERED = True


register_auth_routes()
