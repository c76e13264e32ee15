"""Registration and login endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_token_issuer
from core.tokens import TokenIssuer
from schemas.auth import AuthRequest, TokenResponse
from services import auth_service
from services.exceptions import CredentialsIncorrectError, CredentialsTakenError

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """Create an account and return an access token."""
    try:
        return await auth_service.register(db, issuer, data)
    except CredentialsTakenError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e


@router.post("/login", response_model=TokenResponse)
async def login(
    data: AuthRequest,
    db: AsyncSession = Depends(get_async_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> TokenResponse:
    """Exchange email and password for an access token."""
    try:
        return await auth_service.login(db, issuer, data)
    except CredentialsIncorrectError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e)) from e
