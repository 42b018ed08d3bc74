from marshmallow import Schema, fields


class ErrorDetailSchema(Schema):
    code = fields.String(
        required=True, metadata={"description": "Error code", "example": "NOT_FOUND"}
    )
    details = fields.Dict(
        required=False,
        metadata={
            "description": "Additional error context",
            "example": {"field": "email"},
        },
    )


class ErrorResponseSchema(Schema):
    """Envelope returned by every failed request"""

    success = fields.Boolean(required=True, metadata={"example": False})
    message = fields.String(
        required=True,
        metadata={"description": "Human readable message", "example": "Not found"},
    )
    error = fields.Nested(ErrorDetailSchema, required=True)
