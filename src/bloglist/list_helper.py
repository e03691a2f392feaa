"""Pure aggregation functions over blog collections.

Functions accept ``Blog`` models or plain mappings, so they work on store
results and on raw JSON alike. ``likes`` may be any number; it is passed
through unchanged by both functions.
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from bloglist.models import Blog, FavoriteBlog

BlogLike = Blog | Mapping[str, Any]


def _field(blog: BlogLike, name: str) -> Any:
    if isinstance(blog, Mapping):
        return blog.get(name)
    return getattr(blog, name, None)


def _likes(blog: BlogLike) -> int | float:
    return _field(blog, "likes") or 0


def total_likes(blogs: Iterable[BlogLike]) -> int | float:
    """Sum of likes across all blogs; 0 for an empty collection."""
    return sum(_likes(blog) for blog in blogs)


def favorite_blog(blogs: Sequence[BlogLike]) -> FavoriteBlog | None:
    """Return the most-liked blog as ``{title, author, likes}``, or None if empty.

    Ties go to the earliest blog in input order (``sorted`` is stable under
    ``reverse=True``). The input is left untouched.
    """
    if not blogs:
        return None
    top = sorted(blogs, key=_likes, reverse=True)[0]
    return FavoriteBlog(title=_field(top, "title"), author=_field(top, "author"), likes=_likes(top))
