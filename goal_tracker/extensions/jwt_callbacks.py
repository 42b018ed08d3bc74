from typing import Any, Dict
from uuid import UUID

from flask_jwt_extended import JWTManager

from goal_tracker.extensions.database import db
from goal_tracker.models.user import User
from goal_tracker.utils.response_builder import error_payload


def _parse_identity(raw: Any) -> UUID | None:
    try:
        return UUID(str(raw))
    except (TypeError, ValueError):
        return None


def register_jwt_callbacks(jwt: JWTManager) -> None:
    @jwt.token_in_blocklist_loader  # type: ignore[misc]
    def check_if_token_revoked(
        jwt_header: Dict[str, Any], jwt_payload: Dict[str, Any]
    ) -> bool:
        # Tokens of deleted accounts stop working immediately
        user_id = _parse_identity(jwt_payload.get("sub"))
        if user_id is None:
            return True
        return db.session.get(User, user_id) is None

    @jwt.user_lookup_loader  # type: ignore[misc]
    def load_current_user(
        jwt_header: Dict[str, Any], jwt_payload: Dict[str, Any]
    ) -> User | None:
        user_id = _parse_identity(jwt_payload.get("sub"))
        if user_id is None:
            return None
        return db.session.get(User, user_id)

    @jwt.revoked_token_loader  # type: ignore[misc]
    def revoked_token_callback(
        jwt_header: Dict[str, Any], jwt_payload: Dict[str, Any]
    ) -> Any:
        return error_payload("Token has been revoked", "UNAUTHORIZED"), 401

    @jwt.invalid_token_loader  # type: ignore[misc]
    def invalid_token_callback(error: str) -> Any:
        return error_payload("Invalid token", "UNAUTHORIZED"), 401

    @jwt.expired_token_loader  # type: ignore[misc]
    def expired_token_callback(
        jwt_header: Dict[str, Any], jwt_payload: Dict[str, Any]
    ) -> Any:
        return error_payload("Token has expired", "UNAUTHORIZED"), 401

    @jwt.unauthorized_loader  # type: ignore[misc]
    def missing_token_callback(error: str) -> Any:
        return error_payload("Missing authorization token", "UNAUTHORIZED"), 401

    @jwt.user_lookup_error_loader  # type: ignore[misc]
    def user_lookup_error_callback(
        jwt_header: Dict[str, Any], jwt_payload: Dict[str, Any]
    ) -> Any:
        return error_payload("User not found", "UNAUTHORIZED"), 401
