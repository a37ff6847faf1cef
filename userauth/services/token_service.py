"""Bearer token issuance and verification (JWT)"""
from datetime import datetime, timedelta, timezone
from typing import Optional
import logging

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from userauth.core.config import settings
from userauth.schemas.auth_schemas import TokenClaims

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Base class for token verification failures"""


class InvalidTokenError(TokenError):
    """Bad signature, malformed token or missing claims"""


class TokenExpiredError(TokenError):
    """Signature is valid but the expiry has passed"""


class TokenService:
    """
    Issues and verifies signed, stateless bearer tokens.

    There is no revocation list: a token stays valid until it expires, and
    changing the secret invalidates every token issued with the old one.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        default_ttl: timedelta = timedelta(seconds=72000)
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.default_ttl = default_ttl

    def issue(
        self,
        claims: TokenClaims,
        ttl: Optional[timedelta] = None,
        issued_at: Optional[datetime] = None
    ) -> str:
        """
        Create a signed token for *claims* expiring *ttl* after *issued_at*
        """
        ttl = ttl if ttl is not None else self.default_ttl
        if ttl.total_seconds() <= 0:
            raise ValueError("ttl must be positive")
        issued_at = issued_at or datetime.now(timezone.utc)

        to_encode = {
            "sub": str(claims.user_id),
            "username": claims.username,
            "role": claims.role.value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode *token*, checking signature and expiry
        """
        if not token:
            raise InvalidTokenError("Empty token")

        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError(str(e)) from e
        except JWTError as e:
            logger.warning(f"JWT decode error: {str(e)}")
            raise InvalidTokenError(str(e)) from e

        if payload.get("exp") is None:
            raise InvalidTokenError("Token carries no expiry")

        try:
            return TokenClaims(
                user_id=int(payload.get("sub")),
                username=payload.get("username"),
                role=payload.get("role"),
            )
        except (ValueError, TypeError, ValidationError) as e:
            raise InvalidTokenError(f"Invalid token claims: {e}") from e


def build_token_service() -> TokenService:
    """TokenService configured from settings"""
    return TokenService(
        secret_key=settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
        default_ttl=timedelta(seconds=settings.ACCESS_TOKEN_EXPIRE_SECONDS),
    )
