"""Current-user profile endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.user import UserResponse, UserUpdate
from services import user_service
from services.exceptions import CredentialsTakenError, UniqueConstraintError

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current authenticated user's profile."""
    return current_user


@router.patch("", response_model=UserResponse)
async def update_me(
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> User:
    """Update the current user's email and/or name."""
    try:
        return await user_service.update_user(db, current_user, data)
    except UniqueConstraintError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(CredentialsTakenError()),
        ) from e
