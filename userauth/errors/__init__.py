"""Error handling module"""
from userauth.errors.exceptions import (
    BadRequestException,
    UnauthorizedException,
    ForbiddenException,
    NotFoundException,
    ConflictException,
    InvalidCredentialsException,
    InvalidOTPException,
    InvalidEmailException,
    OTPDeliveryException
)

__all__ = [
    "BadRequestException",
    "UnauthorizedException",
    "ForbiddenException",
    "NotFoundException",
    "ConflictException",
    "InvalidCredentialsException",
    "InvalidOTPException",
    "InvalidEmailException",
    "OTPDeliveryException"
]
