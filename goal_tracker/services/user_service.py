from __future__ import annotations

from typing import Any, Callable, cast
from uuid import UUID

from flask import current_app
from marshmallow import ValidationError
from werkzeug.security import check_password_hash, generate_password_hash

from goal_tracker.exceptions import (
    ConflictExistsError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationAPIError,
)
from goal_tracker.extensions.database import db
from goal_tracker.models.user import User, UserRole
from goal_tracker.schemas.user_schemas import (
    ChangePasswordSchema,
    UserProfileUpdateSchema,
    UserRegistrationSchema,
    UserSchema,
)
from goal_tracker.services import analytics_service
from goal_tracker.services.notification_service import (
    EventEmitter,
    NotificationDispatcher,
    user_registered,
)
from goal_tracker.services.user_directory import SQLAlchemyUserDirectory
from goal_tracker.utils.currency import DEFAULT_CURRENCY_CODE, symbol_for


def ensure_unique_account_fields(
    directory: SQLAlchemyUserDirectory, user: User, changes: dict[str, Any]
) -> None:
    """Raise ``ConflictExistsError`` when another account already uses a value."""
    lookups = (
        ("email", directory.find_by_email),
        ("username", directory.find_by_username),
    )
    for field, find in lookups:
        value = changes.get(field)
        if not value or value == getattr(user, field):
            continue
        existing = find(value)
        if existing is not None and existing.id != user.id:
            raise ConflictExistsError(field)


def apply_account_changes(user: User, changes: dict[str, Any]) -> None:
    for field, value in changes.items():
        setattr(user, field, value)
    if changes.get("currency_code"):
        user.currency_symbol = symbol_for(user.currency_code)


class UserService:
    def __init__(
        self,
        *,
        directory: SQLAlchemyUserDirectory | None = None,
        dispatcher: EventEmitter | None = None,
        hash_password: Callable[[str], str] = generate_password_hash,
    ) -> None:
        self._directory = directory or SQLAlchemyUserDirectory()
        self._dispatcher = dispatcher or NotificationDispatcher()
        self._hash_password = hash_password
        self._schema = UserRegistrationSchema()
        self._profile_schema = UserProfileUpdateSchema()
        self._password_schema = ChangePasswordSchema()
        self._user_schema = UserSchema()

    def register_user(self, payload: dict[str, Any]) -> User:
        try:
            validated = self._schema.load(payload)
        except ValidationError as exc:
            raise ValidationAPIError(details={"messages": exc.messages}) from exc

        if self._directory.find_by_email(validated["email"]) is not None:
            raise ConflictExistsError("email")
        if self._directory.find_by_username(validated["username"]) is not None:
            raise ConflictExistsError("username")

        currency_code = validated.get("currency_code", DEFAULT_CURRENCY_CODE)
        user = User(
            username=validated["username"],
            email=validated["email"],
            password=self._hash_password(validated["password"]),
            role=UserRole.USER.value,
            currency_code=currency_code,
            currency_symbol=symbol_for(currency_code),
        )
        db.session.add(user)
        db.session.commit()
        current_app.logger.info("user_registered user_id=%s", user.id)

        self._dispatcher.emit(user_registered(user))
        analytics_service.track_event(
            user.id,
            "user_registered",
            {"username": user.username, "currency": user.currency_code},
        )
        return user

    def authenticate(self, email: str, password: str) -> User:
        user = self._directory.find_by_email(email)
        if user is None or not check_password_hash(user.password, password):
            current_app.logger.info("login_failed email=%s", email.lower())
            raise InvalidCredentialsError()
        return user

    def get_profile(self, user_id: UUID) -> User:
        user = self._directory.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: UUID, payload: dict[str, Any]) -> User:
        user = self.get_profile(user_id)
        try:
            validated = self._profile_schema.load(payload)
        except ValidationError as exc:
            raise ValidationAPIError(details={"messages": exc.messages}) from exc
        ensure_unique_account_fields(self._directory, user, validated)

        changed_fields = sorted(
            field for field, value in validated.items() if getattr(user, field) != value
        )
        previous_currency = user.currency_code
        apply_account_changes(user, validated)
        db.session.commit()
        current_app.logger.info(
            "profile_updated user_id=%s fields=%s", user.id, ",".join(changed_fields)
        )

        analytics_service.track_event(
            user.id, "profile_updated", {"fields": changed_fields}
        )
        if user.currency_code != previous_currency:
            analytics_service.track_event(
                user.id,
                "currency_changed",
                {"from": previous_currency, "to": user.currency_code},
            )
        return user

    def change_password(self, user_id: UUID, payload: dict[str, Any]) -> None:
        user = self.get_profile(user_id)
        try:
            validated = self._password_schema.load(payload)
        except ValidationError as exc:
            raise ValidationAPIError(details={"messages": exc.messages}) from exc

        if not check_password_hash(user.password, validated["current_password"]):
            current_app.logger.info("password_change_rejected user_id=%s", user.id)
            raise InvalidCredentialsError("Current password is incorrect")
        user.password = self._hash_password(validated["new_password"])
        db.session.commit()
        current_app.logger.info("password_changed user_id=%s", user.id)

    def serialize(self, user: User) -> dict[str, Any]:
        return cast(dict[str, Any], self._user_schema.dump(user))
