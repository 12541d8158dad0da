"""
Authentication endpoints.

Exchanges email/password credentials for a bearer token.
"""

from fastapi import APIRouter, Depends

from modules.users.interfaces import IUserService
from modules.users.models import LoginRequest, TokenResponse
from ..dependencies import get_user_service

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    users: IUserService = Depends(get_user_service),
) -> TokenResponse:
    """
    Issue an access token.

    Returns 403 for an unknown email or a wrong password alike.
    """
    _, token = await users.authenticate(str(request.email), request.password)
    return TokenResponse(access_token=token)
