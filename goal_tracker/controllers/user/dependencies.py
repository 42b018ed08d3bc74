from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from flask import Flask

from goal_tracker.services.user_service import UserService

from ..dependency_registry import install, resolve

USER_DEPENDENCIES_EXTENSION_KEY = "user_dependencies"


@dataclass(frozen=True)
class UserDependencies:
    user_service_factory: Callable[[], UserService] = UserService


def register_user_dependencies(
    app: Flask,
    dependencies: UserDependencies | None = None,
) -> None:
    install(app, USER_DEPENDENCIES_EXTENSION_KEY, dependencies or UserDependencies())


def get_user_dependencies() -> UserDependencies:
    return resolve(USER_DEPENDENCIES_EXTENSION_KEY, UserDependencies, UserDependencies)
