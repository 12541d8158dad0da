"""
Bearer token authentication dependency.

Extracts the bearer token and resolves it to a stored user through the
user service.
"""

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from modules.users.interfaces import IUserService
from modules.users.models import User
from ..dependencies import get_user_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


class MissingCredentialsError(HTTPException):
    """401 for requests that carry no bearer token at all."""

    def __init__(self, detail: str = "Missing authorization header"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    users: IUserService = Depends(get_user_service),
) -> User:
    """
    Dependency that requires authentication.

    A missing header is a 401. A token that fails verification raises an
    AuthenticationError, which the application error handler turns into 403.

    Usage:
        @router.get("/protected")
        async def protected_route(user: User = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    if credentials is None:
        raise MissingCredentialsError()

    return await users.current_user(credentials.credentials)
