"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_TITLE_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 2000
MAX_LINK_LENGTH = 2048


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    The owner is always taken from the authenticated identity; any owner key
    in the request body is ignored.
    """

    title: str = Field(..., min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    link: str | None = Field(default=None, max_length=MAX_LINK_LENGTH)


class BookmarkUpdate(BaseModel):
    """Schema for a partial bookmark update. Omitted fields are left unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=MAX_TITLE_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    link: str | None = Field(default=None, max_length=MAX_LINK_LENGTH)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: str | None) -> str:
        """Title may be omitted but not cleared."""
        if v is None:
            raise ValueError("title cannot be null")
        return v


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    title: str
    description: str | None
    link: str | None
    user_id: int
    created_at: datetime
    updated_at: datetime


class BookmarkListResponse(BaseModel):
    """All bookmarks owned by the current user."""

    total: int
    data: list[BookmarkResponse]
