"""Service layer for account storage and profile edits."""
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from db.errors import unique_violation_field
from models.user import User
from schemas.user import UserUpdate
from services.exceptions import UniqueConstraintError


async def _flush_or_raise_unique(db: AsyncSession) -> None:
    """Flush pending changes, converting unique violations into UniqueConstraintError."""
    try:
        await db.flush()
    except IntegrityError as e:
        field = unique_violation_field(e, User.__table__)
        if field is None:
            raise
        raise UniqueConstraintError(field) from e


async def create_user(db: AsyncSession, email: str, password_hash: str) -> User:
    """
    Insert a new account.

    Relies on the `uq_users_email` constraint rather than a prior lookup, so two
    concurrent registrations for the same email cannot both succeed.

    Raises:
        UniqueConstraintError: If the email is already registered.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
        After a raise, the session must be rolled back before reuse.
    """
    user = User(email=email, hash=password_hash)
    db.add(user)
    await _flush_or_raise_unique(db)
    await db.refresh(user)
    return user


async def get_user(db: AsyncSession, user_id: int) -> User | None:
    """Get an account by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Get an account by exact (case-sensitive) email."""
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one_or_none()


async def update_user(db: AsyncSession, user: User, data: UserUpdate) -> User:
    """
    Apply a partial profile update to the given account.

    Only fields present in the request are changed. The password hash is not
    reachable through this path.

    Raises:
        UniqueConstraintError: If the new email belongs to another account.
    """
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    await _flush_or_raise_unique(db)
    await db.refresh(user)
    return user
