"""FastAPI dependencies"""
from datetime import timedelta
from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session

from userauth.core.config import settings
from userauth.db.session import SessionLocal
from userauth.repositories.user_repository import UserRepository
from userauth.services.auth_service import AuthFlow
from userauth.services.otp_store import InMemoryOtpStore, OtpStore
from userauth.services.token_service import TokenService, build_token_service
from userauth.utils.email import Notifier, build_notifier

# Process-wide collaborators, created once at import
_otp_store = InMemoryOtpStore(
    ttl=timedelta(minutes=settings.OTP_EXPIRE_MINUTES) if settings.OTP_EXPIRE_MINUTES > 0 else None
)
_token_service = build_token_service()
_notifier = build_notifier()


def get_db() -> Generator:
    """
    Database session dependency
    Yields a database session and ensures it's closed after use
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_otp_store() -> OtpStore:
    return _otp_store


def get_token_service() -> TokenService:
    return _token_service


def get_notifier() -> Notifier:
    return _notifier


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_auth_flow(
    users: UserRepository = Depends(get_user_repository),
    otp_store: OtpStore = Depends(get_otp_store),
    notifier: Notifier = Depends(get_notifier),
    tokens: TokenService = Depends(get_token_service)
) -> AuthFlow:
    return AuthFlow(users=users, otp_store=otp_store, notifier=notifier, tokens=tokens)
