from marshmallow import Schema, fields, pre_load

from goal_tracker.schemas.sanitization import sanitize_string_fields


class AuthSchema(Schema):
    """Login credentials"""

    email = fields.Email(
        required=True,
        metadata={"description": "Account email", "example": "jane@email.com"},
    )
    password = fields.String(
        required=True,
        load_only=True,
        metadata={"description": "Account password", "example": "Secret@123"},
    )

    @pre_load
    def normalize_email(self, data: object, **kwargs: object) -> object:
        sanitized = sanitize_string_fields(data, {"email"})
        if isinstance(sanitized, dict) and isinstance(sanitized.get("email"), str):
            sanitized["email"] = sanitized["email"].lower()
        return sanitized


class AuthSuccessResponseSchema(Schema):
    """Successful login payload"""

    token = fields.String(
        required=True,
        metadata={
            "description": "JWT access token",
            "example": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        },
    )
    user = fields.Dict(
        required=True,
        keys=fields.String(),
        metadata={"description": "Authenticated user"},
    )
