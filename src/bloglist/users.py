"""User registration and login endpoints."""

from fastapi import APIRouter, Depends

from bloglist.models import LoginIn, TokenResponse, UserIn, UserResponse
from bloglist.service import BlogListService, get_service

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/users", response_model=UserResponse)
async def register_user(
    body: UserIn, service: BlogListService = Depends(get_service)
) -> UserResponse:
    """Register a user. The response never includes the password or its hash."""
    return UserResponse.from_user(await service.register_user(body))


@router.get("/users", response_model=list[UserResponse])
async def list_users(service: BlogListService = Depends(get_service)) -> list[UserResponse]:
    return [UserResponse.from_user(u) for u in await service.list_users()]


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginIn, service: BlogListService = Depends(get_service)) -> TokenResponse:
    user, token = await service.login(body)
    return TokenResponse(token=token, username=user.username, name=user.name)
