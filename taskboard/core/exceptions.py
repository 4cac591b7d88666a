"""Custom exceptions for the application."""


class BaseAPIException(Exception):
    """Base exception for API errors."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = None,
        details: dict = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(BaseAPIException):
    """Malformed or out-of-range input."""

    def __init__(self, message: str = "Validation failed", details: dict = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="VALIDATION_ERROR",
            details=details
        )


class DuplicateAccountError(BaseAPIException):
    """An account with this email already exists."""

    def __init__(self, message: str = "User already exists with this email", details: dict = None):
        super().__init__(
            message=message,
            status_code=400,
            error_code="DUPLICATE_ACCOUNT",
            details=details
        )


class InvalidCredentialsError(BaseAPIException):
    """Login failed. Deliberately does not say why."""

    def __init__(self, message: str = "Invalid email or password", details: dict = None):
        super().__init__(
            message=message,
            status_code=401,
            error_code="INVALID_CREDENTIALS",
            details=details
        )


class UnauthorizedError(BaseAPIException):
    """Missing or unusable auth token."""

    def __init__(self, message: str = "Token is not valid", details: dict = None):
        super().__init__(
            message=message,
            status_code=401,
            error_code="UNAUTHORIZED",
            details=details
        )


class TokenInvalidError(UnauthorizedError):
    """Token signature or structure is bad."""

    def __init__(self, message: str = "Token is not valid", details: dict = None):
        super().__init__(message=message, details=details)
        self.error_code = "TOKEN_INVALID"


class TokenExpiredError(UnauthorizedError):
    """Token is past its expiry."""

    def __init__(self, message: str = "Token has expired", details: dict = None):
        super().__init__(message=message, details=details)
        self.error_code = "TOKEN_EXPIRED"


class ForbiddenError(BaseAPIException):
    """Resource belongs to another user."""

    def __init__(self, message: str = "Not authorized to access this task", details: dict = None):
        super().__init__(
            message=message,
            status_code=403,
            error_code="FORBIDDEN",
            details=details
        )


class NotFoundError(BaseAPIException):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found", details: dict = None):
        super().__init__(
            message=message,
            status_code=404,
            error_code="NOT_FOUND_ERROR",
            details=details
        )


class InternalError(BaseAPIException):
    """Unexpected store or crypto failure."""

    def __init__(self, message: str = "Internal server error", details: dict = None):
        super().__init__(
            message=message,
            status_code=500,
            error_code="INTERNAL_ERROR",
            details=details
        )
