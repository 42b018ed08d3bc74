# mypy: disable-error-code=misc

from __future__ import annotations

from typing import Any

from flask import request
from flask_apispec import doc, marshal_with, use_kwargs
from flask_apispec.views import MethodResource

from goal_tracker.exceptions import DomainError
from goal_tracker.extensions.error_handlers import domain_error_response
from goal_tracker.schemas.auth_schema import AuthSchema, AuthSuccessResponseSchema
from goal_tracker.schemas.error_schema import ErrorResponseSchema
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_auth_dependencies


class RegisterResource(MethodResource):
    @doc(
        description="Create a new user account.",
        tags=["Authentication"],
        responses={
            201: {"description": "User created"},
            400: {"description": "Validation error"},
            409: {"description": "Email or username already registered"},
        },
    )
    @marshal_with(ErrorResponseSchema, code=400)
    @marshal_with(ErrorResponseSchema, code=409)
    def post(self) -> Any:
        payload = request.get_json(silent=True) or {}
        service = get_auth_dependencies().user_service_factory()
        try:
            user = service.register_user(payload)
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response(
            "User created successfully",
            {"user": service.serialize(user)},
            status_code=201,
        )


class AuthResource(MethodResource):
    @doc(
        description="Exchange email and password for a JWT access token.",
        tags=["Authentication"],
        responses={
            200: {"description": "Login successful"},
            400: {"description": "Missing credentials"},
            401: {"description": "Invalid credentials"},
        },
    )
    @use_kwargs(AuthSchema, location="json")
    @marshal_with(AuthSuccessResponseSchema, code=200)
    @marshal_with(ErrorResponseSchema, code=401)
    def post(self, email: str, password: str) -> Any:
        dependencies = get_auth_dependencies()
        service = dependencies.user_service_factory()
        try:
            user = service.authenticate(email, password)
        except DomainError as exc:
            return domain_error_response(exc)

        token = dependencies.create_access_token(str(user.id))
        return success_response(
            "Login successful",
            {"token": token, "user": service.serialize(user)},
        )
