"""Blog and user document stores: Protocols, id helpers and in-memory backends."""

from __future__ import annotations

import re
import uuid
from typing import Protocol, runtime_checkable

from bloglist.errors import MalformedIdError, UsernameTakenError
from bloglist.models import Blog, User

_ID_PATTERN = re.compile(r"[0-9a-f]{32}")


def new_id() -> uuid.UUID:
    return uuid.uuid4()


def parse_id(raw: str) -> uuid.UUID:
    """Parse the public hex form of a generated id.

    Raises:
        MalformedIdError: if ``raw`` is not 32 lowercase hex characters.
    """
    if not _ID_PATTERN.fullmatch(raw):
        raise MalformedIdError(raw)
    return uuid.UUID(hex=raw)


@runtime_checkable
class BlogStore(Protocol):
    """Protocol for blog persistence. Each single call is atomic."""

    async def list_all(self) -> list[Blog]: ...

    async def get(self, blog_id: uuid.UUID) -> Blog | None: ...

    async def create(self, blog: Blog) -> Blog: ...

    async def replace(self, blog: Blog) -> Blog | None: ...

    async def delete(self, blog_id: uuid.UUID) -> bool: ...

    async def count(self) -> int: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class UserStore(Protocol):
    """Protocol for user persistence. Usernames are unique (exact match)."""

    async def list_all(self) -> list[User]: ...

    async def get_by_username(self, username: str) -> User | None: ...

    async def create(self, user: User) -> User: ...

    async def count(self) -> int: ...

    async def aclose(self) -> None: ...


class MemoryBlogStore:
    """In-memory blog store; dict insertion order is listing order."""

    def __init__(self) -> None:
        self._data: dict[uuid.UUID, Blog] = {}

    async def list_all(self) -> list[Blog]:
        return list(self._data.values())

    async def get(self, blog_id: uuid.UUID) -> Blog | None:
        return self._data.get(blog_id)

    async def create(self, blog: Blog) -> Blog:
        self._data[blog.id] = blog
        return blog

    async def replace(self, blog: Blog) -> Blog | None:
        if blog.id not in self._data:
            return None
        self._data[blog.id] = blog
        return blog

    async def delete(self, blog_id: uuid.UUID) -> bool:
        return self._data.pop(blog_id, None) is not None

    async def count(self) -> int:
        return len(self._data)

    async def aclose(self) -> None:
        self._data.clear()


class MemoryUserStore:
    """In-memory user store with a username index."""

    def __init__(self) -> None:
        self._data: dict[uuid.UUID, User] = {}
        self._by_username: dict[str, uuid.UUID] = {}

    async def list_all(self) -> list[User]:
        return list(self._data.values())

    async def get_by_username(self, username: str) -> User | None:
        user_id = self._by_username.get(username)
        return self._data.get(user_id) if user_id is not None else None

    async def create(self, user: User) -> User:
        # No await between check and insert: atomic on the event loop
        if user.username in self._by_username:
            raise UsernameTakenError(user.username)
        self._by_username[user.username] = user.id
        self._data[user.id] = user
        return user

    async def count(self) -> int:
        return len(self._data)

    async def aclose(self) -> None:
        self._data.clear()
        self._by_username.clear()
