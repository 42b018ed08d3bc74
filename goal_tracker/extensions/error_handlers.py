from typing import Any

from flask import Flask, Response
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from goal_tracker.exceptions import DomainError
from goal_tracker.utils.response_builder import error_response

_HTTP_ERROR_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    415: "UNSUPPORTED_MEDIA_TYPE",
}


def domain_error_response(error: DomainError) -> Response:
    return error_response(
        error.message,
        error.code,
        status_code=error.status_code,
        details=error.details,
    )


def _webargs_messages(error: HTTPException) -> Any:
    data = getattr(error, "data", None)
    if isinstance(data, dict):
        return data.get("messages")
    return None


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)  # type: ignore[misc]
    def handle_domain_error(e: DomainError) -> Response:
        return domain_error_response(e)

    @app.errorhandler(ValidationError)  # type: ignore[misc]
    def handle_validation_error(e: ValidationError) -> Response:
        return error_response(
            "Please check your input and try again",
            "VALIDATION_ERROR",
            status_code=400,
            details={"messages": e.messages},
        )

    @app.errorhandler(HTTPException)  # type: ignore[misc]
    def handle_http_exception(e: HTTPException) -> Response:
        messages = _webargs_messages(e)
        if e.code == 422 and messages is not None:
            return error_response(
                "Please check your input and try again",
                "VALIDATION_ERROR",
                status_code=400,
                details={"messages": messages},
            )
        status_code = e.code or 500
        return error_response(
            e.description or e.name,
            _HTTP_ERROR_CODES.get(status_code, "HTTP_ERROR"),
            status_code=status_code,
        )

    @app.errorhandler(Exception)  # type: ignore[misc]
    def handle_generic_exception(e: Exception) -> Response:
        app.logger.exception("unhandled_exception type=%s", type(e).__name__)
        return error_response(
            "An unexpected error occurred.",
            "INTERNAL_ERROR",
            status_code=500,
            details={"exception": str(e)},
        )
