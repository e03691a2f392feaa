"""Redis-backed blog and user stores, plus the backend factory.

Records are JSON documents under ``blog:<hex>`` / ``user:<hex>``. A sorted
set per collection, scored by an INCR counter, keeps insertion order.
Multi-key writes go through MULTI/EXEC pipelines so each call is atomic.
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

import structlog

from bloglist.errors import UsernameTakenError
from bloglist.models import Blog, User
from bloglist.store import BlogStore, MemoryBlogStore, MemoryUserStore, UserStore

if TYPE_CHECKING:
    from redis.asyncio import Redis

log = structlog.get_logger()

_BLOG_PREFIX = "blog:"
_BLOG_INDEX = "blogs"
_BLOG_SEQ = "blogs:seq"
_USER_PREFIX = "user:"
_USER_INDEX = "users"
_USER_SEQ = "users:seq"
_USERNAME_PREFIX = "username:"


def _decode(val: bytes | str) -> str:
    return val.decode() if isinstance(val, bytes) else str(val)


class RedisBlogStore:
    """Redis-backed blog store."""

    def __init__(self, client: Redis) -> None:
        self._client: Redis = client

    def _key(self, blog_id: uuid.UUID) -> str:
        return f"{_BLOG_PREFIX}{blog_id.hex}"

    async def list_all(self) -> list[Blog]:
        ids = await self._client.zrange(_BLOG_INDEX, 0, -1)
        if not ids:
            return []
        values = await self._client.mget([f"{_BLOG_PREFIX}{_decode(i)}" for i in ids])
        # A delete may land between ZRANGE and MGET
        return [Blog.model_validate_json(_decode(v)) for v in values if v is not None]

    async def get(self, blog_id: uuid.UUID) -> Blog | None:
        val = await self._client.get(self._key(blog_id))
        if val is None:
            return None
        return Blog.model_validate_json(_decode(val))

    async def create(self, blog: Blog) -> Blog:
        seq = await self._client.incr(_BLOG_SEQ)
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.set(self._key(blog.id), blog.model_dump_json())
            pipe.zadd(_BLOG_INDEX, {blog.id.hex: seq})
            await pipe.execute()
        return blog

    async def replace(self, blog: Blog) -> Blog | None:
        # XX: only overwrite an existing document
        updated = await self._client.set(self._key(blog.id), blog.model_dump_json(), xx=True)
        return blog if updated else None

    async def delete(self, blog_id: uuid.UUID) -> bool:
        async with self._client.pipeline(transaction=True) as pipe:
            pipe.delete(self._key(blog_id))
            pipe.zrem(_BLOG_INDEX, blog_id.hex)
            deleted, _ = await pipe.execute()
        return bool(deleted)

    async def count(self) -> int:
        return int(await self._client.zcard(_BLOG_INDEX))

    async def aclose(self) -> None:
        await self._client.aclose()


class RedisUserStore:
    """Redis-backed user store.

    Usernames are claimed with ``SET NX`` on ``username:<name>`` before the
    document is written; the claim is released if the write fails.
    """

    def __init__(self, client: Redis) -> None:
        self._client: Redis = client

    def _key(self, user_id: uuid.UUID | str) -> str:
        hex_id = user_id.hex if isinstance(user_id, uuid.UUID) else user_id
        return f"{_USER_PREFIX}{hex_id}"

    async def list_all(self) -> list[User]:
        ids = await self._client.zrange(_USER_INDEX, 0, -1)
        if not ids:
            return []
        values = await self._client.mget([self._key(_decode(i)) for i in ids])
        return [User.model_validate_json(_decode(v)) for v in values if v is not None]

    async def get_by_username(self, username: str) -> User | None:
        user_id = await self._client.get(f"{_USERNAME_PREFIX}{username}")
        if user_id is None:
            return None
        val = await self._client.get(self._key(_decode(user_id)))
        if val is None:
            return None
        return User.model_validate_json(_decode(val))

    async def create(self, user: User) -> User:
        claim_key = f"{_USERNAME_PREFIX}{user.username}"
        claimed = await self._client.set(claim_key, user.id.hex, nx=True)
        if not claimed:
            raise UsernameTakenError(user.username)
        try:
            seq = await self._client.incr(_USER_SEQ)
            async with self._client.pipeline(transaction=True) as pipe:
                pipe.set(self._key(user.id), user.model_dump_json())
                pipe.zadd(_USER_INDEX, {user.id.hex: seq})
                await pipe.execute()
        except BaseException:
            await self._client.delete(claim_key)
            log.warning("username_claim_released", username=user.username)
            raise
        return user

    async def count(self) -> int:
        return int(await self._client.zcard(_USER_INDEX))

    async def aclose(self) -> None:
        await self._client.aclose()


def create_stores(backend: str, redis_url: str | None = None) -> tuple[BlogStore, UserStore]:
    """Factory: create the blog and user stores for the given backend.

    Both Redis stores share one client; closing either closes it, and
    repeated ``aclose`` calls are harmless.
    """
    if backend == "redis":
        import redis.asyncio as aioredis

        if not redis_url:
            msg = "redis_url is required when backend='redis'"
            raise ValueError(msg)
        client = aioredis.from_url(redis_url)
        return RedisBlogStore(client), RedisUserStore(client)
    return MemoryBlogStore(), MemoryUserStore()
