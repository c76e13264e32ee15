"""Authentication dependencies: bearer token validation and current-user lookup."""
import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.request_context import Identity
from core.tokens import InvalidTokenError, TokenIssuer
from db.session import get_async_session
from models.user import User
from services import user_service

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme. auto_error is off so every failure takes the same
# path and produces the same 401 body.
security = HTTPBearer(auto_error=False)


def unauthorized() -> HTTPException:
    """Build the uniform 401 response. The cause is never included."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    """Dependency that provides a TokenIssuer bound to the application settings."""
    return TokenIssuer(settings)


async def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> Identity:
    """
    Dependency that validates the bearer token and returns the caller's identity.

    Missing header, wrong scheme, bad signature, expiry and malformed claims all
    raise the same 401.
    """
    if credentials is None:
        logger.debug("Request rejected: no bearer credentials")
        raise unauthorized()

    try:
        return issuer.decode(credentials.credentials)
    except InvalidTokenError:
        raise unauthorized() from None


async def get_current_user(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """
    Dependency that resolves the token's identity to its account.

    A valid token for an account that no longer exists is treated as unauthorized.
    """
    user = await user_service.get_user(db, identity.user_id)
    if user is None:
        logger.warning("Valid token for missing user %s", identity.user_id)
        raise unauthorized()
    return user
