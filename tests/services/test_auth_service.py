"""Tests for the registration and login flows."""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.tokens import TokenIssuer
from schemas.auth import AuthRequest
from services import auth_service, user_service
from services.exceptions import (
    CredentialsIncorrectError,
    CredentialsTakenError,
    UniqueConstraintError,
)


def _creds(email: str = "a@x.com", password: str = "p1") -> AuthRequest:
    return AuthRequest(email=email, password=password)


async def test__register__returns_token_for_new_account(
    db_session: AsyncSession, token_issuer: TokenIssuer,
) -> None:
    response = await auth_service.register(db_session, token_issuer, _creds())

    identity = token_issuer.decode(response.access_token)
    user = await user_service.get_user_by_email(db_session, "a@x.com")
    assert user is not None
    assert identity.user_id == user.id
    assert identity.email == "a@x.com"


async def test__register__stores_password_hash(
    db_session: AsyncSession, token_issuer: TokenIssuer,
) -> None:
    await auth_service.register(db_session, token_issuer, _creds(password="p1"))
    user = await user_service.get_user_by_email(db_session, "a@x.com")
    assert user is not None
    assert user.hash != "p1"
    assert user.hash.startswith("$2")


async def test__register__duplicate_email_raises_credentials_taken(
    db_session: AsyncSession, token_issuer: TokenIssuer,
) -> None:
    first = await auth_service.register(db_session, token_issuer, _creds())
    await db_session.commit()

    with pytest.raises(CredentialsTakenError) as exc_info:
        await auth_service.register(db_session, token_issuer, _creds(password="other"))
    assert str(exc_info.value) == "Credentials taken"
    await db_session.rollback()

    # The first registration's token still resolves to a valid account
    identity = token_issuer.decode(first.access_token)
    assert await user_service.get_user(db_session, identity.user_id) is not None


async def test__register__does_not_check_existence_before_insert(
    db_session: AsyncSession,
    token_issuer: TokenIssuer,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Duplicate detection relies on the store's constraint, not a prior lookup."""

    async def fail_lookup(*_args: object) -> None:
        raise AssertionError("register must not look up the email first")

    monkeypatch.setattr(user_service, "get_user_by_email", fail_lookup)
    await auth_service.register(db_session, token_issuer, _creds())


async def test__register__non_email_unique_violation_propagates_store_error(
    db_session: AsyncSession,
    token_issuer: TokenIssuer,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    store_error = IntegrityError("INSERT INTO users ...", {}, Exception("unique"))

    async def collide_on_other_column(*_args: object) -> None:
        raise UniqueConstraintError("first_name") from store_error

    monkeypatch.setattr(user_service, "create_user", collide_on_other_column)

    with pytest.raises(IntegrityError) as exc_info:
        await auth_service.register(db_session, token_issuer, _creds())
    assert exc_info.value is store_error


async def test__login__after_register_succeeds(
    db_session: AsyncSession, token_issuer: TokenIssuer,
) -> None:
    registered = await auth_service.register(db_session, token_issuer, _creds())
    await db_session.commit()

    logged_in = await auth_service.login(db_session, token_issuer, _creds())

    assert logged_in.access_token
    assert (
        token_issuer.decode(logged_in.access_token).user_id
        == token_issuer.decode(registered.access_token).user_id
    )


async def test__login__wrong_password_and_unknown_email_fail_identically(
    db_session: AsyncSession, token_issuer: TokenIssuer,
) -> None:
    await auth_service.register(db_session, token_issuer, _creds())
    await db_session.commit()

    with pytest.raises(CredentialsIncorrectError) as wrong_password:
        await auth_service.login(db_session, token_issuer, _creds(password="wrong"))
    with pytest.raises(CredentialsIncorrectError) as unknown_email:
        await auth_service.login(db_session, token_issuer, _creds(email="nobody@x.com"))

    assert str(wrong_password.value) == str(unknown_email.value) == "Credentials incorrect"


async def test__login__does_not_log_token(
    db_session: AsyncSession,
    token_issuer: TokenIssuer,
    caplog: pytest.LogCaptureFixture,
) -> None:
    creds = _creds(password="hunter2-secret")
    with caplog.at_level("DEBUG", logger="services"):
        await auth_service.register(db_session, token_issuer, creds)
        await db_session.commit()
        response = await auth_service.login(db_session, token_issuer, creds)

    assert "logged in" in caplog.text
    assert response.access_token not in caplog.text
    assert "hunter2-secret" not in caplog.text
