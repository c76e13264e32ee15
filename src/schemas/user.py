"""Pydantic schemas for the user profile endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schemas.auth import Email


class UserUpdate(BaseModel):
    """
    Schema for a partial profile update.

    Accepts camelCase (`firstName`) or snake_case (`first_name`) keys. There is
    intentionally no password field; unknown keys are ignored.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: Email | None = None
    first_name: str | None = Field(default=None, max_length=255)
    last_name: str | None = Field(default=None, max_length=255)

    @field_validator("email")
    @classmethod
    def email_not_null(cls, v: str | None) -> str:
        """Email may be omitted but not cleared."""
        if v is None:
            raise ValueError("email cannot be null")
        return v


class UserResponse(BaseModel):
    """
    Response model for the current account.

    Has no field for the password hash, so it can never be serialized.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    email: str
    first_name: str | None
    last_name: str | None
    created_at: datetime
    updated_at: datetime
