"""Custom exceptions for error handling"""
from fastapi import HTTPException, status


class BaseHTTPException(HTTPException):
    """Base exception class for all custom HTTP exceptions"""
    def __init__(self, detail: str = None, headers: dict = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.detail,
            headers=headers
        )


class BadRequestException(BaseHTTPException):
    """400 Bad Request"""
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Bad request"


class UnauthorizedException(BaseHTTPException):
    """401 Unauthorized"""
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"

    def __init__(self, detail: str = None):
        super().__init__(
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"}
        )


class ForbiddenException(BaseHTTPException):
    """403 Forbidden"""
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden: Insufficient permissions"


class NotFoundException(BaseHTTPException):
    """404 Not Found"""
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Resource not found"


class ConflictException(BaseHTTPException):
    """409 Conflict"""
    status_code = status.HTTP_409_CONFLICT
    detail = "Resource already exists"


class InvalidCredentialsException(UnauthorizedException):
    """Unknown username or wrong password"""
    detail = "Invalid username or password"


class InvalidOTPException(BadRequestException):
    """No outstanding challenge for the email, or the code does not match"""
    detail = "Invalid OTP"


class InvalidEmailException(NotFoundException):
    """A challenge matched but no user owns the email"""
    detail = "Invalid email"


class OTPDeliveryException(BaseHTTPException):
    """502 Bad Gateway - the mail server refused or could not be reached"""
    status_code = status.HTTP_502_BAD_GATEWAY
    detail = "OTP email could not be delivered"
