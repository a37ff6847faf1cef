"""Authentication middleware and dependencies"""
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from typing import Optional
import logging

from userauth.core.dependencies import get_token_service
from userauth.models.user import UserRole
from userauth.schemas.auth_schemas import TokenClaims
from userauth.services.token_service import TokenExpiredError, TokenError, TokenService
from userauth.errors.exceptions import UnauthorizedException, ForbiddenException

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def require_authenticated(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service)
) -> TokenClaims:
    """
    Resolve the bearer token into claims and attach them to request.state.identity

    Reads only the token; the user record is not consulted, so a deleted
    user's token keeps working until it expires.
    """
    if credentials is None or not credentials.credentials:
        raise UnauthorizedException(detail="No token provided")

    try:
        claims = tokens.verify(credentials.credentials)
    except TokenExpiredError:
        raise ForbiddenException(detail="Token has expired")
    except TokenError as e:
        logger.warning(f"Token verification failed on {request.url.path}: {e}")
        raise ForbiddenException(detail="Failed to authenticate token")

    request.state.identity = claims
    return claims


def require_role(required_role: UserRole):
    """Dependency requiring an authenticated caller holding exactly *required_role*"""
    async def role_checker(claims: TokenClaims = Depends(require_authenticated)) -> TokenClaims:
        if claims.role != required_role:
            raise ForbiddenException(detail=f"{required_role.value.capitalize()} access required")
        return claims
    return role_checker


require_admin = require_role(UserRole.ADMIN)
