from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from flask import Flask

from goal_tracker.models.analytics_event import AnalyticsEvent
from goal_tracker.services import analytics_service

from ..dependency_registry import install, resolve

ANALYTICS_DEPENDENCIES_EXTENSION_KEY = "analytics_dependencies"


@dataclass(frozen=True)
class AnalyticsDependencies:
    list_events: Callable[..., list[AnalyticsEvent]] = (
        analytics_service.recent_events_for_user
    )
    compute_metrics: Callable[..., dict[str, Any]] = analytics_service.user_metrics


def register_analytics_dependencies(
    app: Flask,
    dependencies: AnalyticsDependencies | None = None,
) -> None:
    install(
        app,
        ANALYTICS_DEPENDENCIES_EXTENSION_KEY,
        dependencies or AnalyticsDependencies(),
    )


def get_analytics_dependencies() -> AnalyticsDependencies:
    return resolve(
        ANALYTICS_DEPENDENCIES_EXTENSION_KEY,
        AnalyticsDependencies,
        AnalyticsDependencies,
    )
