from fastapi import HTTPException
from app.constants.error_codes import ErrorCode


class AppException(HTTPException):
    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: ErrorCode,
        details: dict | None = None,
    ):
        super().__init__(status_code=status_code, detail=message)
        self.error_code = error_code
        self.details = details


class ValidationError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict | None = None,
    ):
        super().__init__(400, message, error_code, details)


class NotFoundError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.NOT_FOUND,
        details: dict | None = None,
    ):
        super().__init__(404, message, error_code, details)


class ConflictError(AppException):
    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFLICT,
        details: dict | None = None,
    ):
        super().__init__(409, message, error_code, details)


class InsufficientStockError(AppException):
    """On-hand or batch quantity too low for an outbound movement."""

    def __init__(
        self,
        message: str = "Insufficient stock for outbound movement",
        error_code: ErrorCode = ErrorCode.INSUFFICIENT_STOCK,
        details: dict | None = None,
    ):
        super().__init__(400, message, error_code, details)
