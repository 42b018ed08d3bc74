# mypy: disable-error-code=misc

from __future__ import annotations

from typing import Any
from uuid import UUID

from flask import request
from flask_apispec import doc, use_kwargs
from flask_apispec.views import MethodResource
from flask_jwt_extended import get_current_user

from goal_tracker.exceptions import DomainError
from goal_tracker.extensions.error_handlers import domain_error_response
from goal_tracker.middleware.admin_guard import admin_required
from goal_tracker.schemas.goal_schema import AdminGoalListQuerySchema
from goal_tracker.schemas.user_schemas import AdminUserListQuerySchema
from goal_tracker.services.admin_service import AdminService
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_admin_dependencies

_USER_ID_PARAM = {"user_id": {"in": "path", "type": "string", "required": True}}
_GOAL_ID_PARAM = {"goal_id": {"in": "path", "type": "string", "required": True}}


def _admin_service() -> AdminService:
    return get_admin_dependencies().admin_service_factory(get_current_user())


class AdminUserCollectionResource(MethodResource):
    @doc(
        description="List users with their goal statistics.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Paginated users"},
            401: {"description": "Invalid token"},
            403: {"description": "Administrator access required"},
        },
    )
    @use_kwargs(AdminUserListQuerySchema, location="query")
    @admin_required
    def get(
        self, page: int, per_page: int, search: str | None, role: str | None
    ) -> Any:
        items, pagination = _admin_service().list_users(
            page=page, per_page=per_page, search=search, role=role
        )
        return success_response(
            "Users listed successfully",
            {"items": items},
            meta={"pagination": pagination},
        )


class AdminUserResource(MethodResource):
    @doc(
        description="User profile, goals, recent activity and statistics.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        params=_USER_ID_PARAM,
        responses={
            200: {"description": "User details"},
            403: {"description": "Administrator access required"},
            404: {"description": "User not found"},
        },
    )
    @admin_required
    def get(self, user_id: UUID) -> Any:
        try:
            details = _admin_service().get_user_details(user_id)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response("User retrieved successfully", details)

    @doc(
        description="Update a user's role, username, email or currency.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        params=_USER_ID_PARAM,
        responses={
            200: {"description": "User updated"},
            400: {"description": "Invalid data"},
            403: {"description": "Administrator access required"},
            404: {"description": "User not found"},
            409: {"description": "Email or username already taken"},
        },
    )
    @admin_required
    def put(self, user_id: UUID) -> Any:
        payload = request.get_json(silent=True) or {}
        service = _admin_service()
        try:
            user = service.update_user(user_id, payload)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response(
            "User updated successfully", {"user": service.serialize_user(user)}
        )

    @doc(
        description="Delete a user together with their goals and activity.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        params=_USER_ID_PARAM,
        responses={
            200: {"description": "User deleted"},
            400: {"description": "Administrators cannot delete themselves"},
            403: {"description": "Administrator access required"},
            404: {"description": "User not found"},
        },
    )
    @admin_required
    def delete(self, user_id: UUID) -> Any:
        try:
            result = _admin_service().delete_user(user_id)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response("User deleted successfully", result)


class AdminGoalCollectionResource(MethodResource):
    @doc(
        description="List goals across all users.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Paginated goals"},
            403: {"description": "Administrator access required"},
        },
    )
    @use_kwargs(AdminGoalListQuerySchema, location="query")
    @admin_required
    def get(
        self,
        page: int,
        per_page: int,
        user_id: UUID | None,
        category: str | None,
        timeframe: str | None,
        status: str | None,
    ) -> Any:
        items, pagination = _admin_service().list_goals(
            page=page,
            per_page=per_page,
            user_id=user_id,
            category=category,
            timeframe=timeframe,
            status=status,
        )
        return success_response(
            "Goals listed successfully",
            {"items": items},
            meta={"pagination": pagination},
        )


class AdminGoalResource(MethodResource):
    @doc(
        description="Update any user's goal.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Goal updated"},
            400: {"description": "Invalid data"},
            403: {"description": "Administrator access required"},
            404: {"description": "Goal not found"},
        },
    )
    @admin_required
    def put(self, goal_id: UUID) -> Any:
        payload = request.get_json(silent=True) or {}
        service = _admin_service()
        try:
            goal = service.update_goal(goal_id, payload)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response(
            "Goal updated successfully", {"goal": service.serialize_goal(goal)}
        )

    @doc(
        description="Delete any user's goal.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Goal deleted"},
            403: {"description": "Administrator access required"},
            404: {"description": "Goal not found"},
        },
    )
    @admin_required
    def delete(self, goal_id: UUID) -> Any:
        try:
            result = _admin_service().delete_goal(goal_id)
        except DomainError as exc:
            return domain_error_response(exc)
        return success_response("Goal deleted successfully", result)


class AdminStatsResource(MethodResource):
    @doc(
        description="Platform-wide user, goal, amount and activity counters.",
        tags=["Admin"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Platform statistics"},
            403: {"description": "Administrator access required"},
        },
    )
    @admin_required
    def get(self) -> Any:
        return success_response(
            "Statistics retrieved successfully", _admin_service().platform_stats()
        )
