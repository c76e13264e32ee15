"""
Security test fixtures.

These fixtures create two independent accounts through the API and a
bookmark owned by each, so tests can attempt cross-account access.
"""
import pytest
from httpx import AsyncClient

from tests.conftest import bearer, register_user


@pytest.fixture
async def user_a_token(client: AsyncClient) -> str:
    """Access token for User A."""
    return await register_user(client, "user-a@example.com")


@pytest.fixture
async def user_b_token(client: AsyncClient) -> str:
    """Access token for User B."""
    return await register_user(client, "user-b@example.com")


@pytest.fixture
async def user_a_bookmark(client: AsyncClient, user_a_token: str) -> dict:
    """A bookmark belonging to User A."""
    response = await client.post(
        "/bookmarks",
        headers=bearer(user_a_token),
        json={
            "title": "User A's Private Bookmark",
            "description": "This should only be accessible to User A",
            "link": "https://user-a.example.com/",
        },
    )
    assert response.status_code == 201
    return response.json()


@pytest.fixture
async def user_b_bookmark(client: AsyncClient, user_b_token: str) -> dict:
    """A bookmark belonging to User B."""
    response = await client.post(
        "/bookmarks",
        headers=bearer(user_b_token),
        json={"title": "User B's Bookmark"},
    )
    assert response.status_code == 201
    return response.json()
