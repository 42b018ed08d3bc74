from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from flask import Flask

from goal_tracker.models.user import User
from goal_tracker.services.admin_notification_service import (
    SQLAlchemyNotificationSink,
)
from goal_tracker.services.admin_service import AdminService

from ..dependency_registry import install, resolve

ADMIN_DEPENDENCIES_EXTENSION_KEY = "admin_dependencies"


@dataclass(frozen=True)
class AdminDependencies:
    admin_service_factory: Callable[[User], AdminService] = AdminService
    notification_sink_factory: Callable[[], SQLAlchemyNotificationSink] = (
        SQLAlchemyNotificationSink
    )


def register_admin_dependencies(
    app: Flask,
    dependencies: AdminDependencies | None = None,
) -> None:
    install(
        app, ADMIN_DEPENDENCIES_EXTENSION_KEY, dependencies or AdminDependencies()
    )


def get_admin_dependencies() -> AdminDependencies:
    return resolve(
        ADMIN_DEPENDENCIES_EXTENSION_KEY, AdminDependencies, AdminDependencies
    )
