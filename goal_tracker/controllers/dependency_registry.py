"""Per-app storage for controller collaborators.

Each controller package keeps a frozen dataclass of factories in
``app.extensions`` so tests can swap collaborators without monkeypatching.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from flask import Flask, current_app

T = TypeVar("T")


def install(app: Flask, key: str, dependencies: T) -> None:
    app.extensions.setdefault(key, dependencies)


def resolve(key: str, kind: type[T], build_default: Callable[[], T]) -> T:
    configured = current_app.extensions.get(key)
    if isinstance(configured, kind):
        return configured
    fallback = build_default()
    current_app.extensions[key] = fallback
    return fallback
