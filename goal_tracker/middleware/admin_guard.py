from functools import wraps
from typing import Any, Callable, TypeVar

from flask_jwt_extended import get_current_user, verify_jwt_in_request

from goal_tracker.utils.response_builder import error_response

F = TypeVar("F", bound=Callable[..., Any])


def admin_required(f: F) -> Callable[..., Any]:
    """Allow the wrapped view only for authenticated administrators."""

    @wraps(f)
    def decorated(*args: Any, **kwargs: Any) -> Any:
        verify_jwt_in_request()
        user = get_current_user()
        if user is None or not user.is_admin:
            return error_response(
                "Administrator access required",
                "FORBIDDEN",
                status_code=403,
            )
        return f(*args, **kwargs)

    return decorated
