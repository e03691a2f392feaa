"""Shared test constants, fixtures, and factory functions."""

from collections.abc import AsyncIterator
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from bloglist.config import Settings
from bloglist.main import create_app
from bloglist.models import Blog, BlogIn
from bloglist.service import BlogListService
from bloglist.store import BlogStore, MemoryBlogStore, MemoryUserStore, UserStore, new_id

# -- Constants --

SECRET_KEY = "test-secret-key"
BCRYPT_TEST_ROUNDS = 4  # bcrypt minimum; keeps hashing fast in tests

INITIAL_BLOGS: list[dict[str, Any]] = [
    {
        "title": "React patterns",
        "author": "Michael Chan",
        "url": "https://reactpatterns.com/",
        "likes": 7,
    },
    {
        "title": "Go To Statement Considered Harmful",
        "author": "Edsger W. Dijkstra",
        "url": "http://www.u.arizona.edu/~rubinson/copyright_violations/Go_To_Considered_Harmful.html",
        "likes": 5,
    },
]

NEW_BLOG: dict[str, Any] = {
    "title": "test",
    "author": "test mctester",
    "url": "https://example.com/",
    "likes": 55,
}


# -- Factories --


def make_settings(**overrides: Any) -> Settings:
    """Create a Settings instance with test defaults. Override any field."""
    defaults: dict[str, Any] = {
        "secret_key": SECRET_KEY,
        "bcrypt_rounds": BCRYPT_TEST_ROUNDS,
    }
    return Settings(**(defaults | overrides))


def make_blog(**overrides: Any) -> Blog:
    """Create a Blog with a fresh id. Override any field."""
    fields: dict[str, Any] = {"id": new_id(), **INITIAL_BLOGS[0]}
    return Blog(**(fields | overrides))


def make_service(
    settings: Settings | None = None,
    blogs: BlogStore | None = None,
    users: UserStore | None = None,
) -> BlogListService:
    return BlogListService.from_settings(
        settings or make_settings(),
        blogs if blogs is not None else MemoryBlogStore(),
        users if users is not None else MemoryUserStore(),
    )


async def seed_blogs(service: BlogListService) -> list[Blog]:
    return [await service.create_blog(BlogIn(**b)) for b in INITIAL_BLOGS]


# -- Fixtures --


@pytest.fixture
async def service() -> BlogListService:
    """Service over memory stores, seeded with INITIAL_BLOGS."""
    svc = make_service()
    await seed_blogs(svc)
    return svc


@pytest.fixture
async def client(service: BlogListService) -> AsyncIterator[AsyncClient]:
    """AsyncClient wired to a fresh app instance holding the seeded service."""
    app = create_app(make_settings())
    app.state.service = service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
