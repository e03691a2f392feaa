"""Blog and user operations over injected stores.

``BlogListService`` is constructed once per app (see ``main.lifespan``) and
reached by handlers through ``request.app.state.service``.
"""

from __future__ import annotations

import asyncio
from typing import cast

import structlog
from fastapi import Request

from bloglist.config import Settings
from bloglist.errors import AuthenticationError, NotFoundError, ValidationError
from bloglist import metrics as app_metrics
from bloglist.models import Blog, BlogIn, LoginIn, User, UserIn
from bloglist.security import PasswordHasher, create_access_token
from bloglist.store import BlogStore, UserStore, new_id, parse_id
from bloglist.validation import validate_blog, validate_new_user

log = structlog.get_logger()


class BlogListService:
    def __init__(
        self,
        blogs: BlogStore,
        users: UserStore,
        hasher: PasswordHasher,
        *,
        username_min_length: int = 3,
        password_min_length: int = 3,
        secret_key: str | None = None,
        token_expire_minutes: int = 60,
    ) -> None:
        self.blogs = blogs
        self.users = users
        self._hasher = hasher
        self._username_min_length = username_min_length
        self._password_min_length = password_min_length
        self._secret_key = secret_key
        self._token_expire_minutes = token_expire_minutes

    @classmethod
    def from_settings(
        cls, settings: Settings, blogs: BlogStore, users: UserStore
    ) -> BlogListService:
        return cls(
            blogs,
            users,
            PasswordHasher(rounds=settings.bcrypt_rounds),
            username_min_length=settings.username_min_length,
            password_min_length=settings.password_min_length,
            secret_key=settings.secret_key,
            token_expire_minutes=settings.token_expire_minutes,
        )

    # -- Blogs --

    async def list_blogs(self) -> list[Blog]:
        return await self.blogs.list_all()

    async def get_blog(self, raw_id: str) -> Blog:
        blog = await self.blogs.get(parse_id(raw_id))
        if blog is None:
            raise NotFoundError(f"blog {raw_id} not found")
        return blog

    async def create_blog(self, data: BlogIn) -> Blog:
        errors = validate_blog(data)
        if errors:
            raise ValidationError(errors)
        blog = Blog(
            id=new_id(),
            title=data.title,
            author=data.author,
            url=data.url,
            likes=data.likes or 0,
        )
        await self.blogs.create(blog)
        app_metrics.blogs_created_total.add(1)
        await log.ainfo("blog_created", blog_id=blog.id.hex, title=blog.title)
        return blog

    async def update_blog(self, raw_id: str, data: BlogIn) -> Blog:
        """Replace title, author, url and likes of an existing blog."""
        blog_id = parse_id(raw_id)
        errors = validate_blog(data)
        if errors:
            raise ValidationError(errors)
        replacement = Blog(
            id=blog_id,
            title=data.title,
            author=data.author,
            url=data.url,
            likes=data.likes or 0,
        )
        updated = await self.blogs.replace(replacement)
        if updated is None:
            raise NotFoundError(f"blog {raw_id} not found")
        await log.ainfo("blog_updated", blog_id=raw_id)
        return updated

    async def delete_blog(self, raw_id: str) -> None:
        """Delete a blog. Deleting an unknown id is not an error."""
        deleted = await self.blogs.delete(parse_id(raw_id))
        if deleted:
            app_metrics.blogs_deleted_total.add(1)
        await log.ainfo("blog_deleted", blog_id=raw_id, existed=deleted)

    # -- Users --

    async def list_users(self) -> list[User]:
        return await self.users.list_all()

    async def register_user(self, data: UserIn) -> User:
        errors = validate_new_user(
            data,
            username_min_length=self._username_min_length,
            password_min_length=self._password_min_length,
        )
        if errors:
            raise ValidationError(errors)
        username, password = cast(str, data.username), cast(str, data.password)
        # bcrypt is CPU-bound; keep it off the event loop
        password_hash = await asyncio.to_thread(self._hasher.hash, password)
        user = User(
            id=new_id(), username=username, name=data.name, password_hash=password_hash
        )
        await self.users.create(user)
        app_metrics.users_registered_total.add(1)
        await log.ainfo("user_registered", user_id=user.id.hex, username=user.username)
        return user

    async def login(self, data: LoginIn) -> tuple[User, str]:
        """Check credentials and issue a signed token for the user."""
        user = await self.users.get_by_username(data.username)
        valid = user is not None and await asyncio.to_thread(
            self._hasher.verify, data.password, user.password_hash
        )
        if not valid or user is None:
            app_metrics.login_failures_total.add(1)
            raise AuthenticationError("invalid username or password")
        token = create_access_token(
            {"sub": user.username, "id": user.id.hex},
            self._secret_key,
            self._token_expire_minutes,
        )
        return user, token

    async def aclose(self) -> None:
        await self.blogs.aclose()
        await self.users.aclose()


def get_service(request: Request) -> BlogListService:
    """FastAPI dependency returning the app's service instance."""
    service: BlogListService = request.app.state.service
    return service
