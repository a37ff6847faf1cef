"""Database models"""
from userauth.models.user import User, UserRole

__all__ = ["User", "UserRole"]
