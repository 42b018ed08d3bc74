# mypy: disable-error-code=misc

from __future__ import annotations

from typing import Any
from uuid import UUID

from flask import request
from flask_apispec import doc, use_kwargs
from flask_apispec.views import MethodResource
from flask_jwt_extended import get_jwt_identity, jwt_required

from goal_tracker.application.services.goal_application_service import (
    GoalApplicationService,
)
from goal_tracker.exceptions import DomainError
from goal_tracker.extensions.error_handlers import domain_error_response
from goal_tracker.schemas.goal_schema import (
    GoalContributionSchema,
    GoalListQuerySchema,
)
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_goal_dependencies

_GOAL_ID_PARAM = {"goal_id": {"in": "path", "type": "string", "required": True}}


def _current_service() -> GoalApplicationService:
    user_id = UUID(get_jwt_identity())
    return get_goal_dependencies().goal_application_service_factory(user_id)


class GoalCollectionResource(MethodResource):
    @doc(
        description="Create a savings goal for the authenticated user.",
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        responses={
            201: {"description": "Goal created"},
            400: {"description": "Invalid data"},
            401: {"description": "Invalid token"},
        },
    )
    @jwt_required()
    def post(self) -> Any:
        payload = request.get_json(silent=True) or {}
        try:
            goal_data = _current_service().create_goal(payload)
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response(
            "Goal created successfully",
            {"goal": goal_data},
            status_code=201,
        )

    @doc(
        description=(
            "List the authenticated user's goals, newest first, with "
            "statistics computed over the same filters."
        ),
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Paginated goals and statistics"},
            400: {"description": "Invalid parameters"},
            401: {"description": "Invalid token"},
        },
    )
    @use_kwargs(GoalListQuerySchema, location="query")
    @jwt_required()
    def get(
        self,
        page: int,
        per_page: int,
        timeframe: str | None,
        category: str | None,
        status: str | None,
    ) -> Any:
        try:
            result = _current_service().list_goals(
                page=page,
                per_page=per_page,
                timeframe=timeframe,
                category=category,
                status=status,
            )
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response(
            "Goals listed successfully",
            {"items": result["items"], "statistics": result["statistics"]},
            meta={"pagination": result["pagination"]},
        )

    @doc(
        description="Delete every goal owned by the authenticated user.",
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Goals deleted"},
            401: {"description": "Invalid token"},
        },
    )
    @jwt_required()
    def delete(self) -> Any:
        result = _current_service().delete_all_goals()
        return success_response("Goals deleted successfully", result)


class GoalResource(MethodResource):
    @doc(
        description="Return one of the authenticated user's goals.",
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Goal found"},
            401: {"description": "Invalid token"},
            403: {"description": "Not the goal owner"},
            404: {"description": "Goal not found"},
        },
    )
    @jwt_required()
    def get(self, goal_id: UUID) -> Any:
        try:
            goal_data = _current_service().get_goal(goal_id)
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response("Goal retrieved successfully", {"goal": goal_data})

    @doc(
        description="Partially update one of the authenticated user's goals.",
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Goal updated"},
            400: {"description": "Invalid data"},
            401: {"description": "Invalid token"},
            403: {"description": "Not the goal owner"},
            404: {"description": "Goal not found"},
        },
    )
    @jwt_required()
    def put(self, goal_id: UUID) -> Any:
        payload = request.get_json(silent=True) or {}
        try:
            goal_data = _current_service().update_goal(goal_id, payload)
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response("Goal updated successfully", {"goal": goal_data})

    @doc(
        description="Delete one of the authenticated user's goals.",
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Goal deleted"},
            401: {"description": "Invalid token"},
            403: {"description": "Not the goal owner"},
            404: {"description": "Goal not found"},
        },
    )
    @jwt_required()
    def delete(self, goal_id: UUID) -> Any:
        try:
            _current_service().delete_goal(goal_id)
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response("Goal deleted successfully", {})


class GoalContributionResource(MethodResource):
    @doc(
        description=(
            "Add money to a goal. Progress, milestones and completion are "
            "recomputed from the new balance."
        ),
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        params=_GOAL_ID_PARAM,
        responses={
            200: {"description": "Contribution recorded"},
            400: {"description": "Invalid amount"},
            401: {"description": "Invalid token"},
            403: {"description": "Not the goal owner"},
            404: {"description": "Goal not found"},
        },
    )
    @use_kwargs(GoalContributionSchema, location="json")
    @jwt_required()
    def post(self, goal_id: UUID, amount: Any, note: str | None = None) -> Any:
        try:
            goal_data = _current_service().add_contribution(
                goal_id, amount=amount, note=note
            )
        except DomainError as exc:
            return domain_error_response(exc)

        return success_response("Contribution added successfully", {"goal": goal_data})


class GoalDashboardResource(MethodResource):
    @doc(
        description=(
            "Overview, breakdowns, recent goals and goals close to completion "
            "for the authenticated user."
        ),
        tags=["Goals"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Dashboard composed"},
            401: {"description": "Invalid token"},
        },
    )
    @jwt_required()
    def get(self) -> Any:
        dashboard = _current_service().get_dashboard()
        return success_response("Dashboard retrieved successfully", dashboard)
