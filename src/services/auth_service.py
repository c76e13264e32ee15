"""Service layer for registration and login."""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from core.passwords import hash_password, verify_password
from core.tokens import TokenIssuer
from schemas.auth import AuthRequest, TokenResponse
from services import user_service
from services.exceptions import (
    CredentialsIncorrectError,
    CredentialsTakenError,
    UniqueConstraintError,
)

logger = logging.getLogger(__name__)


async def register(
    db: AsyncSession,
    issuer: TokenIssuer,
    data: AuthRequest,
) -> TokenResponse:
    """
    Create an account and return an access token for it.

    Flow:
    1. Hash the password
    2. Insert the account (the store enforces email uniqueness)
    3. Map an email collision to CredentialsTakenError; other failures propagate
    4. Issue a token for the new account

    Raises:
        CredentialsTakenError: If the email is already registered.
    """
    password_hash = hash_password(data.password)
    try:
        user = await user_service.create_user(db, data.email, password_hash)
    except UniqueConstraintError as e:
        if e.field != "email":
            # Not a credentials problem; re-raise the original store error
            raise e.__cause__
        logger.info("Registration rejected: email already registered")
        raise CredentialsTakenError() from e

    logger.info("Registered user %s", user.id)
    return TokenResponse(access_token=issuer.issue(user.id, user.email))


async def login(
    db: AsyncSession,
    issuer: TokenIssuer,
    data: AuthRequest,
) -> TokenResponse:
    """
    Verify credentials and return an access token.

    Raises:
        CredentialsIncorrectError: If the email is unknown or the password is wrong.
    """
    user = await user_service.get_user_by_email(db, data.email)
    if user is None:
        logger.info("Login failed: unknown email")
        raise CredentialsIncorrectError()

    if not verify_password(data.password, user.hash):
        logger.info("Login failed for user %s: wrong password", user.id)
        raise CredentialsIncorrectError()

    logger.info("User %s logged in", user.id)
    return TokenResponse(access_token=issuer.issue(user.id, user.email))
