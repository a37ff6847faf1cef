"""Authentication and user schemas"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from userauth.models.user import UserRole


class UserCreate(BaseModel):
    """Schema for sign-up and admin add-user"""
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=255)
    mobile: Optional[str] = Field(None, max_length=32)
    email: EmailStr
    role: UserRole = UserRole.USER


class LoginRequest(BaseModel):
    """Schema for login request"""
    username: str
    password: str


class OTPVerifyRequest(BaseModel):
    """Schema for OTP verification"""
    email: EmailStr
    otp: str = Field(..., min_length=1, max_length=16)


class ResendOTPRequest(BaseModel):
    """Schema for requesting a fresh OTP"""
    email: EmailStr


class MessageResponse(BaseModel):
    """Plain acknowledgement"""
    message: str


class TokenResponse(BaseModel):
    """Token response schema"""
    token: str
    token_type: str = "bearer"


class UserProfile(BaseModel):
    """User as returned to clients, never includes the password"""
    id: int
    username: str
    mobile: Optional[str] = None
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TokenClaims(BaseModel):
    """Identity carried inside a bearer token"""
    user_id: int
    username: str
    role: UserRole
