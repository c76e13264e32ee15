"""Pydantic schemas for registration and login."""
from typing import Annotated

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, Field, StringConstraints, field_validator

# bcrypt only reads the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def _check_email_format(v: str) -> str:
    """Reject malformed addresses but keep the value exactly as sent."""
    validate_email(v, check_deliverability=False)
    return v


Email = Annotated[str, StringConstraints(max_length=255), AfterValidator(_check_email_format)]


class AuthRequest(BaseModel):
    """Credentials for both registration and login."""

    email: Email
    password: str = Field(..., min_length=1)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        """Passwords longer than bcrypt's input limit would be truncated or rejected."""
        if len(v.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class TokenResponse(BaseModel):
    """Signed access token returned by register and login."""

    access_token: str
