from . import resources as _resources  # noqa: F401
from . import routes as _routes  # noqa: F401
from .blueprint import auth_bp
from .dependencies import (
    AuthDependencies,
    get_auth_dependencies,
    register_auth_dependencies,
)
from .resources import AuthResource, RegisterResource

__all__ = [
    "auth_bp",
    "AuthDependencies",
    "register_auth_dependencies",
    "get_auth_dependencies",
    "AuthResource",
    "RegisterResource",
]
