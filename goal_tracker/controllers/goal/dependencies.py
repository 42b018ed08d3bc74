from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable
from uuid import UUID

from flask import Flask

from goal_tracker.application.services.goal_application_service import (
    GoalApplicationService,
)

from ..dependency_registry import install, resolve

GOAL_DEPENDENCIES_EXTENSION_KEY = "goal_dependencies"


@dataclass(frozen=True)
class GoalDependencies:
    goal_application_service_factory: Callable[[UUID], GoalApplicationService] = (
        field(default=GoalApplicationService.with_defaults)
    )


def register_goal_dependencies(
    app: Flask,
    dependencies: GoalDependencies | None = None,
) -> None:
    install(app, GOAL_DEPENDENCIES_EXTENSION_KEY, dependencies or GoalDependencies())


def get_goal_dependencies() -> GoalDependencies:
    return resolve(GOAL_DEPENDENCIES_EXTENSION_KEY, GoalDependencies, GoalDependencies)
