"""
User service implementation.

Registration, login, profile and password workflows composed from an
IUserRepository and an ISecurityService.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Optional

from shared.models import QueryParams, ResultPaging

from .exceptions import InvalidCredentialsError, InvalidTokenError, UserNotFoundError
from .interfaces import IUserRepository, ISecurityService, IUserService
from .models import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    User,
    UserUpdate,
)

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserService(IUserService):
    """
    Implementation of the user service.

    Holds no state of its own; all persistence goes through the repository
    and all crypto through the security service.
    """

    def __init__(self, repository: IUserRepository, security: ISecurityService):
        self._repository = repository
        self._security = security

    async def register(self, request: RegisterRequest, actor: Optional[str] = None) -> User:
        """
        Create a new user with a hashed password.

        Self-registration (no actor) records the new user as its own creator.
        """
        user_id = str(uuid.uuid4())
        now = _utcnow()
        creator = actor or user_id

        user = User(
            id=user_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=str(request.email),
            password=await self._security.hash(request.password),
            created_by=creator,
            updated_by=creator,
            created_at=now,
            updated_at=now,
        )
        created = await self._repository.create(user)
        logger.info(f"Registered user {created.id}")
        return created

    async def authenticate(self, email: str, password: str) -> tuple[User, str]:
        """
        Check credentials and issue a token.

        Unknown email and wrong password raise the same error.
        """
        try:
            user = await self._repository.find_by_email(email)
        except UserNotFoundError:
            raise InvalidCredentialsError()

        if not await self._security.verify_hash(user.password, password):
            logger.debug(f"Password mismatch for user {user.id}")
            raise InvalidCredentialsError()

        token = await self._security.token_generator(user)
        return user, token

    async def current_user(self, token: str) -> User:
        """Resolve a bearer token to the user it was issued for."""
        payload = await self._security.decode_token(token)
        try:
            return await self._repository.find_by_email(payload.email)
        except UserNotFoundError:
            raise InvalidTokenError("Token subject no longer exists")

    async def get_user(self, user_id: str) -> User:
        return await self._repository.find(user_id)

    async def list_users(self, params: QueryParams) -> ResultPaging[User]:
        return await self._repository.get_all(params)

    async def update_profile(
        self, user_id: str, request: ProfileUpdateRequest, actor: str
    ) -> User:
        patch = UserUpdate(
            first_name=request.first_name,
            last_name=request.last_name,
            email=str(request.email),
            updated_by=actor,
            updated_at=_utcnow(),
        )
        return await self._repository.update(user_id, patch)

    async def change_password(
        self, user_id: str, request: PasswordChangeRequest, actor: str
    ) -> User:
        """Rotate a password after checking the current one."""
        user = await self._repository.find(user_id)
        if not await self._security.verify_hash(user.password, request.current_password):
            raise InvalidCredentialsError("Current password is incorrect")

        digest = await self._security.hash(request.new_password)
        updated = await self._repository.update_password(user_id, digest, actor, _utcnow())
        logger.info(f"Password changed for user {user_id}")
        return updated

    async def delete_user(self, user_id: str) -> None:
        await self._repository.delete(user_id)
        logger.info(f"Deleted user {user_id}")
