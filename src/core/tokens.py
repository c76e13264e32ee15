"""Access token issuance and verification (HS256 JWTs)."""
import logging
from datetime import UTC, datetime, timedelta

import jwt

from core.config import Settings
from core.request_context import Identity

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "email", "iat", "exp"]


class InvalidTokenError(Exception):
    """Raised when a token is malformed, has a bad signature, or has expired."""


class TokenIssuer:
    """
    Signs and verifies access tokens with the process-wide JWT secret.

    The token payload is `{sub, email, iat, exp}` where `sub` is the account id
    (as a string, per RFC 7519) and `exp` is a fixed lifetime after `iat`.

    Raises:
        ConfigurationError: If the settings carry no signing secret.
    """

    def __init__(self, settings: Settings) -> None:
        self._secret = settings.require_jwt_secret()
        self._algorithm = settings.jwt_algorithm
        self._lifetime = timedelta(minutes=settings.jwt_expires_minutes)

    def issue(self, user_id: int, email: str, issued_at: datetime | None = None) -> str:
        """Build and sign an access token for the given account."""
        now = issued_at or datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> Identity:
        """
        Verify a token's signature and expiry and return the identity it asserts.

        Raises:
            InvalidTokenError: On any verification failure. The specific cause is
                logged server-side only; the token itself is never logged.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
            user_id = int(payload["sub"])
            email = payload["email"]
        except (jwt.PyJWTError, ValueError, TypeError) as e:
            logger.warning("Access token rejected: %s", type(e).__name__)
            raise InvalidTokenError(type(e).__name__) from e

        if not isinstance(email, str):
            logger.warning("Access token rejected: non-string email claim")
            raise InvalidTokenError("email claim must be a string")

        return Identity(user_id=user_id, email=email)
