"""Pydantic schemas for request/response validation"""
from userauth.schemas.auth_schemas import (
    UserCreate,
    LoginRequest,
    OTPVerifyRequest,
    ResendOTPRequest,
    MessageResponse,
    TokenResponse,
    UserProfile,
    TokenClaims
)

__all__ = [
    "UserCreate",
    "LoginRequest",
    "OTPVerifyRequest",
    "ResendOTPRequest",
    "MessageResponse",
    "TokenResponse",
    "UserProfile",
    "TokenClaims"
]
