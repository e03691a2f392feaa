"""Tests for the blog CRUD endpoints."""

from typing import Any
from uuid import uuid4

from httpx import AsyncClient

from tests.conftest import INITIAL_BLOGS, NEW_BLOG


async def _all_blogs(client: AsyncClient) -> list[dict[str, Any]]:
    resp = await client.get("/api/blogs")
    assert resp.status_code == 200
    return resp.json()


def _without_id(blogs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [{k: v for k, v in b.items() if k != "id"} for b in blogs]


async def test_blogs_are_returned_as_json(client: AsyncClient) -> None:
    resp = await client.get("/api/blogs")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/json")


async def test_all_blogs_are_returned_in_order(client: AsyncClient) -> None:
    blogs = await _all_blogs(client)
    assert len(blogs) == len(INITIAL_BLOGS)
    assert [b["title"] for b in blogs] == [b["title"] for b in INITIAL_BLOGS]


async def test_blogs_have_string_id(client: AsyncClient) -> None:
    for blog in await _all_blogs(client):
        assert isinstance(blog["id"], str)
        assert "_id" not in blog
        assert len(blog["id"]) == 32


async def test_valid_blog_can_be_added(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json=NEW_BLOG)
    assert resp.status_code == 201
    assert resp.headers["content-type"].startswith("application/json")
    created = resp.json()
    assert created["id"]

    blogs = await _all_blogs(client)
    assert len(blogs) == len(INITIAL_BLOGS) + 1
    assert NEW_BLOG in _without_id(blogs)


async def test_missing_likes_defaults_to_zero(client: AsyncClient) -> None:
    new_blog = {k: v for k, v in NEW_BLOG.items() if k != "likes"}
    resp = await client.post("/api/blogs", json=new_blog)
    assert resp.status_code == 201
    assert resp.json()["likes"] == 0

    blogs = await _all_blogs(client)
    assert len(blogs) == len(INITIAL_BLOGS) + 1
    assert {**new_blog, "likes": 0} in _without_id(blogs)


async def test_missing_author_is_allowed(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json={"title": "t", "url": "u"})
    assert resp.status_code == 201
    assert resp.json()["author"] is None


async def test_missing_title_and_url_returns_400(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json={})
    assert resp.status_code == 400
    fields = {f["field"] for f in resp.json()["fields"]}
    assert fields == {"title", "url"}

    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS)


async def test_empty_title_returns_400(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json={**NEW_BLOG, "title": ""})
    assert resp.status_code == 400
    assert "title" in resp.json()["error"]
    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS)


async def test_non_integer_likes_returns_400(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json={**NEW_BLOG, "likes": "many"})
    assert resp.status_code == 400
    assert resp.json()["fields"][0]["field"] == "likes"


async def test_malformed_json_returns_400(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/blogs", content=b"{not json", headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400


async def test_read_single_blog(client: AsyncClient) -> None:
    first = (await _all_blogs(client))[0]
    resp = await client.get(f"/api/blogs/{first['id']}")
    assert resp.status_code == 200
    assert resp.json() == first


async def test_read_unknown_blog_returns_404(client: AsyncClient) -> None:
    resp = await client.get(f"/api/blogs/{uuid4().hex}")
    assert resp.status_code == 404


async def test_delete_removes_exactly_that_blog(client: AsyncClient) -> None:
    first, second = await _all_blogs(client)
    resp = await client.delete(f"/api/blogs/{first['id']}")
    assert resp.status_code == 204
    assert resp.content == b""

    assert await _all_blogs(client) == [second]
    assert (await client.get(f"/api/blogs/{first['id']}")).status_code == 404


async def test_delete_is_idempotent(client: AsyncClient) -> None:
    first = (await _all_blogs(client))[0]
    assert (await client.delete(f"/api/blogs/{first['id']}")).status_code == 204
    assert (await client.delete(f"/api/blogs/{first['id']}")).status_code == 204
    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS) - 1


async def test_delete_unknown_id_returns_204(client: AsyncClient) -> None:
    resp = await client.delete(f"/api/blogs/{uuid4().hex}")
    assert resp.status_code == 204
    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS)


async def test_delete_malformed_id_returns_400(client: AsyncClient) -> None:
    resp = await client.delete("/api/blogs/not-an-id")
    assert resp.status_code == 400
    assert resp.json() == {"error": "malformatted id"}


async def test_update_replaces_all_fields(client: AsyncClient) -> None:
    first = (await _all_blogs(client))[0]
    replacement = {"title": "new title", "author": "new author", "url": "https://new/", "likes": 99}

    resp = await client.put(f"/api/blogs/{first['id']}", json=replacement)
    assert resp.status_code == 200
    assert resp.json() == {"id": first["id"], **replacement}

    blogs = await _all_blogs(client)
    assert len(blogs) == len(INITIAL_BLOGS)
    assert blogs[0] == {"id": first["id"], **replacement}


async def test_update_without_likes_resets_to_zero(client: AsyncClient) -> None:
    first = (await _all_blogs(client))[0]
    resp = await client.put(f"/api/blogs/{first['id']}", json={"title": "t", "url": "u"})
    assert resp.status_code == 200
    assert resp.json()["likes"] == 0
    assert resp.json()["author"] is None


async def test_update_unknown_id_returns_404(client: AsyncClient) -> None:
    resp = await client.put(f"/api/blogs/{uuid4().hex}", json=NEW_BLOG)
    assert resp.status_code == 404
    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS)


async def test_update_malformed_id_returns_400(client: AsyncClient) -> None:
    resp = await client.put("/api/blogs/12345", json=NEW_BLOG)
    assert resp.status_code == 400


async def test_update_with_invalid_body_leaves_blog_unchanged(client: AsyncClient) -> None:
    first = (await _all_blogs(client))[0]
    resp = await client.put(f"/api/blogs/{first['id']}", json={"author": "only author"})
    assert resp.status_code == 400
    assert (await _all_blogs(client))[0] == first


async def test_boolean_likes_returns_400(client: AsyncClient) -> None:
    resp = await client.post("/api/blogs", json={"title": "t", "url": "u", "likes": True})
    assert resp.status_code == 400
    assert resp.json()["fields"][0]["field"] == "likes"
    assert len(await _all_blogs(client)) == len(INITIAL_BLOGS)


async def test_malformed_json_reports_body_field(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/blogs", content=b'{"title": ', headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400
    assert [f["field"] for f in resp.json()["fields"]] == ["body"]
