"""Blog CRUD endpoints."""

from fastapi import APIRouter, Depends, Response, status

from bloglist.models import BlogIn, BlogResponse
from bloglist.service import BlogListService, get_service

router = APIRouter(prefix="/api/blogs", tags=["blogs"])


@router.get("", response_model=list[BlogResponse])
async def list_blogs(service: BlogListService = Depends(get_service)) -> list[BlogResponse]:
    return [BlogResponse.from_blog(b) for b in await service.list_blogs()]


@router.get("/{blog_id}", response_model=BlogResponse)
async def read_blog(
    blog_id: str, service: BlogListService = Depends(get_service)
) -> BlogResponse:
    return BlogResponse.from_blog(await service.get_blog(blog_id))


@router.post("", status_code=status.HTTP_201_CREATED, response_model=BlogResponse)
async def create_blog(
    body: BlogIn, service: BlogListService = Depends(get_service)
) -> BlogResponse:
    return BlogResponse.from_blog(await service.create_blog(body))


@router.put("/{blog_id}", response_model=BlogResponse)
async def update_blog(
    blog_id: str, body: BlogIn, service: BlogListService = Depends(get_service)
) -> BlogResponse:
    return BlogResponse.from_blog(await service.update_blog(blog_id, body))


@router.delete("/{blog_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_blog(blog_id: str, service: BlogListService = Depends(get_service)) -> Response:
    await service.delete_blog(blog_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
