# mypy: disable-error-code=misc

from __future__ import annotations

from typing import Any
from uuid import UUID

from flask_apispec import doc, use_kwargs
from flask_apispec.views import MethodResource
from flask_jwt_extended import get_jwt_identity, jwt_required

from goal_tracker.schemas.analytics_schema import (
    AnalyticsEventQuerySchema,
    AnalyticsMetricsQuerySchema,
)
from goal_tracker.services.analytics_service import serialize_analytics_event
from goal_tracker.utils.response_builder import success_response

from .dependencies import get_analytics_dependencies


class AnalyticsEventsResource(MethodResource):
    @doc(
        description="The authenticated user's own analytics events, newest first.",
        tags=["Analytics"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Events returned"},
            400: {"description": "Invalid parameters"},
            401: {"description": "Invalid token"},
        },
    )
    @use_kwargs(AnalyticsEventQuerySchema, location="query")
    @jwt_required()
    def get(self, limit: int, event_type: str | None) -> Any:
        events = get_analytics_dependencies().list_events(
            UUID(get_jwt_identity()), limit=limit, event_type=event_type
        )
        return success_response(
            "Events retrieved successfully",
            {"events": [serialize_analytics_event(event) for event in events]},
        )


class AnalyticsMetricsResource(MethodResource):
    @doc(
        description=(
            "Activity metrics for the authenticated user: events by type, "
            "daily activity over the last 7 days, goal outcomes and "
            "contributions within the period."
        ),
        tags=["Analytics"],
        security=[{"BearerAuth": []}],
        responses={
            200: {"description": "Metrics returned"},
            400: {"description": "Unknown period"},
            401: {"description": "Invalid token"},
        },
    )
    @use_kwargs(AnalyticsMetricsQuerySchema, location="query")
    @jwt_required()
    def get(self, period: str) -> Any:
        metrics = get_analytics_dependencies().compute_metrics(
            UUID(get_jwt_identity()), period=period
        )
        return success_response("Metrics retrieved successfully", metrics)
