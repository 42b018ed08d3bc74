from typing import Any, Dict, Optional


class DomainError(Exception):
    def __init__(
        self,
        message: str,
        *,
        code: str = "BAD_REQUEST",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}


class ValidationAPIError(DomainError):
    def __init__(
        self,
        message: str = "Please check your input and try again",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details,
        )


class InvalidCredentialsError(DomainError):
    def __init__(self, message: str = "Invalid email or password") -> None:
        super().__init__(message, code="INVALID_CREDENTIALS", status_code=401)


class NotAuthorizedError(DomainError):
    def __init__(
        self,
        message: str = "You are not authorized to perform this action",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="FORBIDDEN",
            status_code=403,
            details=details,
        )


class NotFoundError(DomainError):
    def __init__(
        self,
        message: str = "Resource not found",
        *,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            code="NOT_FOUND",
            status_code=404,
            details=details,
        )


class InvalidAmountError(DomainError):
    def __init__(self, message: str = "Contribution amount must be positive") -> None:
        super().__init__(message, code="INVALID_AMOUNT", status_code=400)


class ConflictExistsError(DomainError):
    def __init__(self, field: str, message: Optional[str] = None) -> None:
        super().__init__(
            message or f"A user with this {field} already exists",
            code="ALREADY_EXISTS",
            status_code=409,
            details={"field": field},
        )
        self.field = field


class InvalidOperationError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, code="INVALID_OPERATION", status_code=400)
