"""Pytest fixtures for testing."""
import os
from collections.abc import AsyncGenerator
from pathlib import Path

# Must be set before any app imports that trigger Settings validation.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-at-least-32-bytes")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings  # noqa: E402
from core.tokens import TokenIssuer  # noqa: E402
from models.base import Base  # noqa: E402

TEST_JWT_SECRET = "test-secret-key-that-is-at-least-32-bytes"


@pytest.fixture
def settings() -> Settings:
    """Settings used by every test app instance."""
    return Settings(database_url="sqlite+aiosqlite:///:memory:", jwt_secret=TEST_JWT_SECRET)


@pytest.fixture
def token_issuer(settings: Settings) -> TokenIssuer:
    """TokenIssuer sharing the test signing secret."""
    return TokenIssuer(settings)


@pytest.fixture
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine]:
    """
    Create a fresh SQLite database file for each test.

    A file (rather than :memory:) lets every session get its own connection,
    matching how requests use the pool in production.
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the per-test database."""
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """A session for calling services directly and for inspecting the database."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> AsyncGenerator[AsyncClient]:
    """
    Create an unauthenticated test client.

    Each request gets its own session that commits at the end, like
    `get_async_session` does in production.
    """
    from api.main import app  # noqa: PLC0415
    from core.config import get_settings  # noqa: PLC0415
    from db.session import get_async_session  # noqa: PLC0415

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = lambda: settings

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


async def register_user(client: AsyncClient, email: str, password: str = "p1") -> str:
    """Register an account through the API and return its access token."""
    response = await client.post("/auth/register", json={"email": email, "password": password})
    assert response.status_code == 201, response.text
    return response.json()["access_token"]


def bearer(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def user_token(client: AsyncClient) -> str:
    """Access token for a freshly registered user."""
    return await register_user(client, "a@x.com")


@pytest.fixture
async def other_user_token(client: AsyncClient) -> str:
    """Access token for a second, unrelated user."""
    return await register_user(client, "b@x.com")


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch) -> None:
    """Use the minimum bcrypt work factor so registration-heavy tests stay fast."""
    monkeypatch.setattr("core.passwords.BCRYPT_ROUNDS", 4)


def flip_signature_char(token: str) -> str:
    """Change one character in the middle of a JWT's signature segment."""
    header, payload, signature = token.split(".")
    index = len(signature) // 2
    replacement = "A" if signature[index] != "A" else "B"
    return ".".join([header, payload, signature[:index] + replacement + signature[index + 1:]])
