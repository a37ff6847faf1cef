"""Credential storage and verification

Every password comparison in the application goes through this module. The
scheme list comes from ``PASSWORD_SCHEMES``; the default ``plaintext`` scheme
keeps passwords verbatim, and configuring e.g. ``bcrypt,plaintext`` hashes new
passwords while still accepting the old verbatim ones.
"""
from typing import Optional
from passlib.context import CryptContext

from userauth.core.config import settings

pwd_context = CryptContext(
    schemes=settings.PASSWORD_SCHEMES,
    deprecated="auto",
)


def verify_password(plain_password: str, stored_password: Optional[str]) -> bool:
    """Check a submitted password against the stored credential"""
    if not stored_password:
        return False
    return pwd_context.verify(plain_password, stored_password)


def hash_password(password: str) -> str:
    """Produce the value to store for *password* under the primary scheme"""
    return pwd_context.hash(password)
