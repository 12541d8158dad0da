"""
Security service implementation.

Password digests are argon2i over the password with a process-wide salt, so
the same password always yields the same digest (two users sharing a password
share a digest). Access tokens are HS256 JWTs carrying ``email`` and ``exp``.
"""

import logging
import secrets
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw
from pydantic import ValidationError

from shared.config import get_settings
from shared.exceptions import InternalError
from shared.workers import WorkerPool, get_worker_pool

from .exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    TokenSigningError,
)
from .interfaces import ISecurityService
from .models import TokenPayload, User

logger = logging.getLogger(__name__)

# argon2i parameters; changing any of them invalidates every stored digest.
ARGON2_TIME_COST = 3
ARGON2_MEMORY_COST = 4096  # KiB
ARGON2_PARALLELISM = 1
ARGON2_HASH_LEN = 32
MIN_SALT_BYTES = 8


class SecurityService(ISecurityService):
    """
    Implementation of the security service.

    Hashing is CPU-bound and runs on the worker pool when one is supplied.
    """

    def __init__(
        self,
        salt: str,
        jwt_key: str,
        algorithm: str = "HS256",
        token_ttl: timedelta = timedelta(days=30),
        leeway_seconds: int = 60,
        workers: Optional[WorkerPool] = None,
    ):
        salt_bytes = salt.encode("utf-8")
        if len(salt_bytes) < MIN_SALT_BYTES:
            raise ValueError(f"Password salt must be at least {MIN_SALT_BYTES} bytes")
        if not jwt_key:
            raise ValueError("JWT signing key must not be empty")

        self._salt = salt_bytes
        self._jwt_key = jwt_key
        self._algorithm = algorithm
        self._token_ttl = token_ttl
        self._leeway = leeway_seconds
        self._workers = workers

    async def hash(self, plaintext: str) -> str:
        if self._workers is None:
            return self._hash_sync(plaintext)
        return await self._workers.run(self._hash_sync, plaintext)

    async def verify_hash(self, digest: str, plaintext: str) -> bool:
        candidate = await self.hash(plaintext)
        return secrets.compare_digest(candidate.encode("utf-8"), digest.encode("utf-8"))

    async def token_generator(self, user: User) -> str:
        """Issue a token for ``user`` valid for the configured lifetime."""
        expires_at = datetime.now(timezone.utc) + self._token_ttl
        claims = TokenPayload(email=user.email, exp=int(expires_at.timestamp()))

        try:
            return jwt.encode(claims.model_dump(), self._jwt_key, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.warning(f"Token signing failed for {user.id}: {e}")
            raise TokenSigningError(str(e)) from e

    async def decode_token(self, token: str) -> TokenPayload:
        """
        Verify signature and expiry, then return the claims.

        Expired tokens raise ExpiredTokenError; anything else that fails to
        verify raises InvalidTokenError. Both are authentication failures.
        """
        if not token:
            raise MissingTokenError()

        try:
            payload = jwt.decode(
                token,
                self._jwt_key,
                algorithms=[self._algorithm],
                leeway=self._leeway,
                options={"require": ["exp"]},
            )
            return TokenPayload(**payload)
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e
        except ValidationError as e:
            raise InvalidTokenError("Token is missing required claims") from e

    def _hash_sync(self, plaintext: str) -> str:
        try:
            raw = hash_secret_raw(
                secret=plaintext.encode("utf-8"),
                salt=self._salt,
                time_cost=ARGON2_TIME_COST,
                memory_cost=ARGON2_MEMORY_COST,
                parallelism=ARGON2_PARALLELISM,
                hash_len=ARGON2_HASH_LEN,
                type=Type.I,
            )
        except HashingError as e:
            raise InternalError(f"Could not hash password: {e}", code="HASHING_FAILED") from e
        return raw.hex()


# Module-level instance getter
_service_instance: Optional[SecurityService] = None
_service_lock = threading.Lock()


def get_security_service() -> SecurityService:
    """
    Get the security service singleton, configured from settings.

    Raises:
        RuntimeError: If the salt or signing key is not configured.
    """
    global _service_instance
    if _service_instance is not None:
        return _service_instance

    with _service_lock:
        if _service_instance is None:
            settings = get_settings()
            if not settings.password_salt or not settings.jwt_secret:
                raise RuntimeError(
                    "Security configuration missing. "
                    "Set USERBASE_PASSWORD_SALT and USERBASE_JWT_SECRET environment variables."
                )
            _service_instance = SecurityService(
                salt=settings.password_salt,
                jwt_key=settings.jwt_secret,
                algorithm=settings.jwt_algorithm,
                token_ttl=timedelta(days=settings.token_ttl_days),
                leeway_seconds=settings.token_leeway_seconds,
                workers=get_worker_pool(),
            )
        return _service_instance


def reset_security_service() -> None:
    """Forget the security service singleton; the next call rebuilds it."""
    global _service_instance
    with _service_lock:
        _service_instance = None
