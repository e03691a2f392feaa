"""Per-entity validation returning structured field errors."""

from bloglist.config import DEFAULT_PASSWORD_MIN_LENGTH, DEFAULT_USERNAME_MIN_LENGTH
from bloglist.errors import FieldError
from bloglist.models import BlogIn, UserIn


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_blog(blog: BlogIn) -> list[FieldError]:
    """Check a blog body for create or full replacement."""
    errors: list[FieldError] = []
    if _blank(blog.title):
        errors.append(FieldError("title", "title is required"))
    if _blank(blog.url):
        errors.append(FieldError("url", "url is required"))
    if blog.likes is not None and blog.likes < 0:
        errors.append(FieldError("likes", "likes must not be negative"))
    return errors


def validate_new_user(
    user: UserIn,
    *,
    username_min_length: int = DEFAULT_USERNAME_MIN_LENGTH,
    password_min_length: int = DEFAULT_PASSWORD_MIN_LENGTH,
) -> list[FieldError]:
    """Check a registration body. Uniqueness is enforced by the user store.

    The password length is checked here, before hashing, since a hash
    says nothing about the length of its input.
    """
    errors: list[FieldError] = []
    if _blank(user.username):
        errors.append(FieldError("username", "username is required"))
    elif len(user.username) < username_min_length:
        errors.append(
            FieldError(
                "username",
                f"username must be at least {username_min_length} characters long",
            )
        )
    if not user.password:
        errors.append(FieldError("password", "password is required"))
    elif len(user.password) < password_min_length:
        errors.append(
            FieldError(
                "password",
                f"password must be at least {password_min_length} characters long",
            )
        )
    return errors
