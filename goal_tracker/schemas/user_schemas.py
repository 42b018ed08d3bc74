from marshmallow import (
    Schema,
    ValidationError,
    fields,
    pre_load,
    validate,
    validates_schema,
)

from goal_tracker.models.user import USER_ROLES
from goal_tracker.schemas.sanitization import sanitize_string_fields
from goal_tracker.utils.currency import (
    DEFAULT_CURRENCY_CODE,
    SUPPORTED_CURRENCY_CODES,
)

USERNAME_PATTERN = r"^[a-zA-Z0-9_-]+$"


def _normalize_user_payload(data: object) -> object:
    sanitized = sanitize_string_fields(data, {"username", "email", "currency_code"})
    if not isinstance(sanitized, dict):
        return sanitized
    if isinstance(sanitized.get("email"), str):
        sanitized["email"] = sanitized["email"].lower()
    if isinstance(sanitized.get("currency_code"), str):
        sanitized["currency_code"] = sanitized["currency_code"].upper()
    return sanitized


class UserRegistrationSchema(Schema):
    """Payload for new account registration"""

    username = fields.Str(
        required=True,
        validate=[
            validate.Length(min=3, max=30),
            validate.Regexp(
                USERNAME_PATTERN,
                error=(
                    "Username can only contain letters, numbers, "
                    "underscores and hyphens"
                ),
            ),
        ],
        metadata={"description": "Unique public handle", "example": "jane_doe"},
    )
    email = fields.Email(
        required=True,
        metadata={"description": "Unique email address", "example": "jane@email.com"},
    )
    password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=8),
        metadata={"description": "At least 8 characters", "example": "Secret@123"},
    )
    currency_code = fields.Str(
        load_default=DEFAULT_CURRENCY_CODE,
        validate=validate.OneOf(SUPPORTED_CURRENCY_CODES),
        metadata={"description": "Preferred currency", "example": "EUR"},
    )

    @pre_load
    def sanitize_input(self, data: object, **kwargs: object) -> object:
        return _normalize_user_payload(data)


class _AccountFieldsSchema(Schema):
    username = fields.Str(
        validate=[validate.Length(min=3, max=30), validate.Regexp(USERNAME_PATTERN)]
    )
    email = fields.Email()
    currency_code = fields.Str(validate=validate.OneOf(SUPPORTED_CURRENCY_CODES))

    @pre_load
    def sanitize_input(self, data: object, **kwargs: object) -> object:
        return _normalize_user_payload(data)


class UserProfileUpdateSchema(_AccountFieldsSchema):
    """Fields a user may change on their own account"""

    @validates_schema
    def require_a_field(self, data: dict, **kwargs: object) -> None:
        if not data:
            raise ValidationError("At least one field must be provided for update")


class AdminUserUpdateSchema(_AccountFieldsSchema):
    """Fields an administrator may change on any account"""

    role = fields.Str(validate=validate.OneOf(USER_ROLES))


class ChangePasswordSchema(Schema):
    current_password = fields.Str(required=True, load_only=True)
    new_password = fields.Str(
        required=True,
        load_only=True,
        validate=validate.Length(min=8, max=100),
        metadata={"description": "8 to 100 characters", "example": "Better@456"},
    )

    @validates_schema
    def new_password_differs(self, data: dict, **kwargs: object) -> None:
        if data["new_password"] == data["current_password"]:
            raise ValidationError(
                "New password must be different from the current password",
                field_name="new_password",
            )


class UserSchema(Schema):
    class Meta:
        name = "User"

    id = fields.UUID(dump_only=True)
    username = fields.Str(dump_only=True)
    email = fields.Str(dump_only=True)
    role = fields.Str(dump_only=True)
    currency_code = fields.Str(dump_only=True)
    currency_symbol = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True)
    updated_at = fields.DateTime(dump_only=True)


class AdminUserListQuerySchema(Schema):
    page = fields.Int(load_default=1, validate=validate.Range(min=1))
    per_page = fields.Int(load_default=20, validate=validate.Range(min=1, max=100))
    search = fields.Str(load_default=None)
    role = fields.Str(load_default=None, validate=validate.OneOf(USER_ROLES))
