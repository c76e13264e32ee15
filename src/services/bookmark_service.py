"""Service layer for bookmark CRUD operations, scoped to the owning user."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkNotFoundError

logger = logging.getLogger(__name__)

# bookmarks.id is a 32-bit INTEGER column; larger ids cannot exist
MAX_BOOKMARK_ID = 2**31 - 1


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark owned by `user_id`.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = Bookmark(
        user_id=user_id,
        title=data.title,
        description=data.description,
        link=data.link,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    logger.info("User %s created bookmark %s", user_id, bookmark.id)
    return bookmark


async def get_bookmarks(db: AsyncSession, user_id: int) -> list[Bookmark]:
    """Get all bookmarks for a user, oldest first."""
    result = await db.execute(
        select(Bookmark)
        .where(Bookmark.user_id == user_id)
        .order_by(Bookmark.id),
    )
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Get a bookmark by ID, scoped to user.

    The id and owner are matched in a single query, so a bookmark owned by
    someone else is indistinguishable from one that does not exist.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
    """
    if not 0 < bookmark_id <= MAX_BOOKMARK_ID:
        raise BookmarkNotFoundError(bookmark_id)

    result = await db.execute(
        select(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    bookmark = result.scalar_one_or_none()
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Apply a partial update to a bookmark.

    Only fields present in the request body are changed.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)

    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(bookmark, field, value)

    await db.flush()
    await db.refresh(bookmark)
    logger.info("User %s updated bookmark %s", user_id, bookmark_id)
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark:
    """
    Delete a bookmark and return it as it was before deletion.

    Raises:
        BookmarkNotFoundError: If not found or owned by another user.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    await db.delete(bookmark)
    await db.flush()
    logger.info("User %s deleted bookmark %s", user_id, bookmark_id)
    return bookmark
