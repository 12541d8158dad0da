"""
Users module interfaces.

Other modules and the API layer should depend on these protocols, not the
concrete implementations. This enables testing with mocks and swapping the
store or the crypto backend at composition time.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from shared.models import QueryParams, ResultPaging

from .models import (
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RegisterRequest,
    TokenPayload,
    User,
    UserUpdate,
)


@runtime_checkable
class IUserRepository(Protocol):
    """
    Durable storage for User records.

    Every method raises a UserbaseError on failure; callers branch on its
    ``kind`` (NOT_FOUND, CONFLICT, CONNECTION_FAILURE, STORE_FAILURE).
    """

    async def get_all(self, params: QueryParams) -> ResultPaging[User]:
        """
        List users one page at a time.

        Args:
            params: limit/offset of the requested page

        Returns:
            ResultPaging whose total counts all users and whose items hold
            at most ``params.limit`` users
        """
        ...

    async def find(self, user_id: str) -> User:
        """
        Get a user by id.

        Raises:
            NotFoundError: If no user has this id
        """
        ...

    async def find_by_email(self, email: str) -> User:
        """
        Get a user by email.

        Raises:
            NotFoundError: If no user has this email
        """
        ...

    async def create(self, user: User) -> User:
        """
        Insert a full user row.

        Returns:
            The record that was passed in

        Raises:
            ConflictError: If the id or email is already taken
        """
        ...

    async def update(self, user_id: str, patch: UserUpdate) -> User:
        """
        Overwrite the profile fields of a user and return the fresh record.

        Raises:
            NotFoundError: If no user has this id
            ConflictError: If the new email is already taken
        """
        ...

    async def update_password(
        self,
        user_id: str,
        password_digest: str,
        updated_by: str,
        updated_at: datetime,
    ) -> User:
        """
        Replace a user's password digest and return the fresh record.

        Raises:
            NotFoundError: If no user has this id
        """
        ...

    async def delete(self, user_id: str) -> None:
        """Remove a user. Deleting a missing id is not an error."""
        ...


@runtime_checkable
class ISecurityService(Protocol):
    """
    Password hashing and access-token lifecycle.

    Salt and signing key are fixed at construction.
    """

    async def hash(self, plaintext: str) -> str:
        """Return the deterministic salted digest of ``plaintext``."""
        ...

    async def verify_hash(self, digest: str, plaintext: str) -> bool:
        """Return True if ``plaintext`` hashes to ``digest``."""
        ...

    async def token_generator(self, user: User) -> str:
        """
        Issue a signed token for ``user``.

        Raises:
            InternalError: If signing fails
        """
        ...

    async def decode_token(self, token: str) -> TokenPayload:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            AuthenticationError: If the token is missing, malformed, forged
                or expired
        """
        ...


@runtime_checkable
class IUserService(Protocol):
    """
    User account workflows built on the repository and security service.

    This is what the API layer talks to.
    """

    async def register(self, request: RegisterRequest, actor: str | None = None) -> User:
        ...

    async def authenticate(self, email: str, password: str) -> tuple[User, str]:
        ...

    async def current_user(self, token: str) -> User:
        ...

    async def get_user(self, user_id: str) -> User:
        ...

    async def list_users(self, params: QueryParams) -> ResultPaging[User]:
        ...

    async def update_profile(
        self, user_id: str, request: ProfileUpdateRequest, actor: str
    ) -> User:
        ...

    async def change_password(
        self, user_id: str, request: PasswordChangeRequest, actor: str
    ) -> User:
        ...

    async def delete_user(self, user_id: str) -> None:
        ...
