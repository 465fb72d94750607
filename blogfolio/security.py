"""
Password hashing and bearer token issuance.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from blogfolio.config import Settings
from blogfolio.errors import UnauthorizedError

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


def _truncate_to_72_bytes(password: str) -> bytes:
    """bcrypt only looks at the first 72 bytes and newer releases reject more."""
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_truncate_to_72_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(
            _truncate_to_72_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError:
        # Malformed hash in storage.
        return False


@dataclass(frozen=True)
class TokenService:
    """Issues and verifies HS256 tokens carrying a user id in `sub`.

    There is no refresh or revocation: a token is valid until it expires.
    """

    secret: str
    algorithm: str = "HS256"
    expires_in: timedelta = timedelta(days=7)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            expires_in=timedelta(days=settings.token_expire_days),
        )

    def issue(self, user_id: str, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_in,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> str:
        """Return the user id in `token` or raise UnauthorizedError."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            logger.info("Rejected bearer token: %s", exc)
            raise UnauthorizedError("Token is not valid") from exc
        user_id = payload.get("sub")
        if not user_id:
            raise UnauthorizedError("Token is not valid")
        return user_id
