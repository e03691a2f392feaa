"""Pydantic models for blog and user records and their HTTP shapes."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, StrictInt

# -- Stored records --


class Blog(BaseModel):
    """A stored blog entry."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(description="Store-generated id, immutable after creation")
    title: str
    author: str | None = None
    url: str
    likes: int = 0


class User(BaseModel):
    """A stored account. Only the salted hash of the password is kept."""

    model_config = ConfigDict(frozen=True)

    id: UUID
    username: str
    name: str | None = None
    password_hash: str


# -- Request bodies --
# Required fields are optional here so missing values reach explicit validation
# and come back as 400s naming the field.


class BlogIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    author: str | None = None
    url: str | None = None
    # Strict: JSON booleans are not like counts
    likes: StrictInt | None = None


class UserIn(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    name: str | None = None
    password: str | None = None


class LoginIn(BaseModel):
    username: str
    password: str


# -- Responses --


class BlogResponse(BaseModel):
    id: str = Field(description="Hex form of the generated id")
    title: str
    author: str | None
    url: str
    likes: int

    @classmethod
    def from_blog(cls, blog: Blog) -> "BlogResponse":
        return cls(
            id=blog.id.hex, title=blog.title, author=blog.author, url=blog.url, likes=blog.likes
        )


class UserResponse(BaseModel):
    """Public view of a user; never carries the password hash."""

    id: str
    username: str
    name: str | None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id.hex, username=user.username, name=user.name)


class TokenResponse(BaseModel):
    token: str
    username: str
    name: str | None


class FavoriteBlog(BaseModel):
    """Projection returned by ``list_helper.favorite_blog``."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    author: str | None = None
    likes: int | float
