from fastapi import HTTPException, status
from typing import Optional, Dict, Any


class BaseAPIException(HTTPException):
    """Base exception for API errors"""
    def __init__(
        self,
        status_code: int,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}

        super().__init__(
            status_code=status_code,
            detail={
                "success": False,
                "error": {
                    "code": error_code,
                    "message": message,
                    "details": self.details
                }
            }
        )

    def __str__(self) -> str:  # Ensure str(e) returns the human message
        return self.message


class AuthenticationError(BaseAPIException):
    """Authentication related errors"""
    def __init__(self, message: str = "Authentication failed", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            error_code="AUTH_001",
            message=message,
            details=details
        )


class AuthorizationError(BaseAPIException):
    """Authorization related errors"""
    def __init__(self, message: str = "Access forbidden", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            error_code="AUTH_002",
            message=message,
            details=details
        )


# ----------------------------------------------------------------------------
# ValidationError - 누락/잘못된 입력
# ----------------------------------------------------------------------------

class ValidationError(BaseAPIException):
    """Validation errors"""
    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict] = None,
        error_code: str = "VALIDATION_001",
    ):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            details=details
        )


class InvalidAmountError(ValidationError):
    """0 또는 음수 금액 (양수가 필요한 곳)"""
    def __init__(self, message: str = "Invalid amount", details: Optional[Dict] = None):
        super().__init__(message=message, details=details, error_code="AMOUNT_001")


# ----------------------------------------------------------------------------
# NotFoundError - 계정/학습지/퀴즈 없음
# ----------------------------------------------------------------------------

class NotFoundError(BaseAPIException):
    """Resource not found errors"""
    def __init__(
        self,
        message: str = "Resource not found",
        details: Optional[Dict] = None,
        error_code: str = "NOT_FOUND_001",
    ):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            error_code=error_code,
            message=message,
            details=details
        )


class AccountNotFoundError(NotFoundError):
    def __init__(self, user_id: Any):
        super().__init__(
            message=f"Account not found: {user_id}",
            details={"user_id": user_id},
            error_code="ACCOUNT_404",
        )


# ----------------------------------------------------------------------------
# PolicyViolationError - 비즈니스 규칙 위반
# ----------------------------------------------------------------------------

class PolicyViolationError(BaseAPIException):
    """Business rule violations"""
    def __init__(self, error_code: str, message: str, details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            error_code=error_code,
            message=message,
            details=details
        )


class InsufficientBalanceError(PolicyViolationError):
    """Insufficient balance errors"""
    def __init__(self, message: str = "Insufficient balance", details: Optional[Dict] = None):
        super().__init__(error_code="BALANCE_001", message=message, details=details)


class NotFollowingError(PolicyViolationError):
    def __init__(self, message: str = "You can only send points to users you follow", details: Optional[Dict] = None):
        super().__init__(error_code="FOLLOW_001", message=message, details=details)


class SelfTransferError(PolicyViolationError):
    def __init__(self, message: str = "Cannot transfer points to yourself", details: Optional[Dict] = None):
        super().__init__(error_code="TRANSFER_001", message=message, details=details)


class DuplicateResourceError(PolicyViolationError):
    def __init__(self, message: str = "Resource already exists", details: Optional[Dict] = None):
        super().__init__(error_code="DUPLICATE_001", message=message, details=details)


# ----------------------------------------------------------------------------
# InfrastructureError - DB 장애 등
# ----------------------------------------------------------------------------

class InfrastructureError(BaseAPIException):
    """Database / third-party failures"""
    def __init__(self, message: str = "Service temporarily unavailable", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            error_code="INFRA_001",
            message=message,
            details=details
        )


class InternalServerError(BaseAPIException):
    """Internal server errors"""
    def __init__(self, message: str = "Internal server error", details: Optional[Dict] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error_code="INTERNAL_001",
            message=message,
            details=details
        )
