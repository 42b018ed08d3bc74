# mypy: disable-error-code=misc

from __future__ import annotations

from typing import Any
from uuid import UUID

from flask import request
from flask_apispec import doc, marshal_with
from flask_apispec.views import MethodResource
from flask_jwt_extended import get_jwt_identity, jwt_required

from goal_tracker.exceptions import DomainError
from goal_tracker.extensions.error_handlers import domain_error_response
from goal_tracker.schemas.error_schema import ErrorResponseSchema
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_user_dependencies


def _current_user_id() -> UUID:
    return UUID(get_jwt_identity())


class UserMeResource(MethodResource):
    @doc(
        description="Profile of the authenticated user.",
        tags=["Users"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Profile returned"},
            401: {"description": "Invalid token"},
            404: {"description": "User not found"},
        },
    )
    @marshal_with(ErrorResponseSchema, code=404)
    @jwt_required()
    def get(self) -> Any:
        service = get_user_dependencies().user_service_factory()
        try:
            user = service.get_profile(_current_user_id())
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response(
            "Profile retrieved successfully", {"user": service.serialize(user)}
        )

    @doc(
        description=(
            "Update the authenticated user's username, email or preferred "
            "currency. New goals default to the preferred currency; existing "
            "goals keep their own."
        ),
        tags=["Users"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Profile updated"},
            400: {"description": "Invalid data or empty update"},
            401: {"description": "Invalid token"},
            409: {"description": "Email or username already taken"},
        },
    )
    @marshal_with(ErrorResponseSchema, code=400)
    @marshal_with(ErrorResponseSchema, code=409)
    @jwt_required()
    def put(self) -> Any:
        payload = request.get_json(silent=True) or {}
        service = get_user_dependencies().user_service_factory()
        try:
            user = service.update_profile(_current_user_id(), payload)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response(
            "Profile updated successfully", {"user": service.serialize(user)}
        )


class UserPasswordResource(MethodResource):
    @doc(
        description="Change the password after confirming the current one.",
        tags=["Users"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Password changed"},
            400: {"description": "Invalid or unchanged new password"},
            401: {"description": "Invalid token or wrong current password"},
        },
    )
    @marshal_with(ErrorResponseSchema, code=400)
    @marshal_with(ErrorResponseSchema, code=401)
    @jwt_required()
    def put(self) -> Any:
        payload = request.get_json(silent=True) or {}
        service = get_user_dependencies().user_service_factory()
        try:
            service.change_password(_current_user_id(), payload)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response("Password changed successfully")
