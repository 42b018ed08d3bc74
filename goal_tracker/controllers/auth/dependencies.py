from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, cast

from flask import Flask
from flask_jwt_extended import create_access_token

from goal_tracker.services.user_service import UserService

from ..dependency_registry import install, resolve

AUTH_DEPENDENCIES_EXTENSION_KEY = "auth_dependencies"
ACCESS_TOKEN_LIFETIME = timedelta(hours=1)


def _issue_access_token(identity: str) -> str:
    return cast(
        str,
        create_access_token(identity=identity, expires_delta=ACCESS_TOKEN_LIFETIME),
    )


@dataclass(frozen=True)
class AuthDependencies:
    user_service_factory: Callable[[], UserService] = UserService
    create_access_token: Callable[[str], str] = _issue_access_token


def register_auth_dependencies(
    app: Flask,
    dependencies: AuthDependencies | None = None,
) -> None:
    install(app, AUTH_DEPENDENCIES_EXTENSION_KEY, dependencies or AuthDependencies())


def get_auth_dependencies() -> AuthDependencies:
    return resolve(AUTH_DEPENDENCIES_EXTENSION_KEY, AuthDependencies, AuthDependencies)
