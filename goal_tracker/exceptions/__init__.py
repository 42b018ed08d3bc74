from .domain_errors import (
    ConflictExistsError,
    DomainError,
    InvalidAmountError,
    InvalidCredentialsError,
    InvalidOperationError,
    NotAuthorizedError,
    NotFoundError,
    ValidationAPIError,
)

__all__ = [
    "DomainError",
    "ValidationAPIError",
    "InvalidCredentialsError",
    "NotAuthorizedError",
    "NotFoundError",
    "InvalidAmountError",
    "ConflictExistsError",
    "InvalidOperationError",
]
