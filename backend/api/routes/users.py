"""
User endpoints.

CRUD over the user resource. Registration is public; everything else
requires a valid bearer token. Any authenticated user may act on any user;
there is no role model.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from modules.users.interfaces import IUserService
from modules.users.models import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    User,
    UserListResponse,
    UserResponse,
)
from shared.models import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, PageParams
from ..dependencies import get_user_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterRequest,
    users: IUserService = Depends(get_user_service),
) -> UserResponse:
    """Register a new user. 409 if the email is taken."""
    user = await users.register(request)
    return UserResponse.from_user(user)


@router.get("", response_model=UserListResponse)
async def list_users(
    limit: int = Query(DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
    offset: int = Query(0, ge=0),
    users: IUserService = Depends(get_user_service),
    _: User = Depends(get_current_user),
) -> UserListResponse:
    """List users one page at a time."""
    params = PageParams(limit=limit, offset=offset)
    page = await users.list_users(params)
    return UserListResponse(
        total=page.total,
        items=[UserResponse.from_user(u) for u in page.items],
        limit=params.limit,
        offset=params.offset,
        has_more=(params.offset + len(page.items)) < page.total,
    )


@router.get("/me", response_model=UserResponse)
async def get_current_user_profile(
    user: User = Depends(get_current_user),
) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.from_user(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    users: IUserService = Depends(get_user_service),
    _: User = Depends(get_current_user),
) -> UserResponse:
    user = await users.get_user(user_id)
    return UserResponse.from_user(user)


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: ProfileUpdateRequest,
    users: IUserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
) -> UserResponse:
    """Overwrite a user's name and email. The password is not touched."""
    user = await users.update_profile(user_id, request, actor=actor.id)
    return UserResponse.from_user(user)


@router.put("/{user_id}/password", response_model=UserResponse)
async def change_password(
    user_id: str,
    request: PasswordChangeRequest,
    users: IUserService = Depends(get_user_service),
    actor: User = Depends(get_current_user),
) -> UserResponse:
    """Rotate a user's password; the current password must be supplied."""
    user = await users.change_password(user_id, request, actor=actor.id)
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    users: IUserService = Depends(get_user_service),
    _: User = Depends(get_current_user),
) -> Response:
    """Delete a user. Deleting an unknown id still returns 204."""
    await users.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
