# ============================================================================
# FILE: moodmusic/core/security.py
# Password hashing and signed bearer tokens
# ============================================================================
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel, ValidationError

from moodmusic.core.errors import BadRequest, InvalidToken

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# bcrypt ignores everything after 72 bytes
BCRYPT_MAX_BYTES = 72


def _check_password_length(password: str) -> None:
    if len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise BadRequest(f"Password too long (max {BCRYPT_MAX_BYTES} bytes)")


def get_password_hash(password: str) -> str:
    _check_password_length(password)
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    # Over-long input never matches, and is answered like a wrong password
    if len(plain_password.encode("utf-8")) > BCRYPT_MAX_BYTES:
        return False
    return pwd_context.verify(plain_password, hashed_password)


class TokenClaims(BaseModel):
    """Identity carried by a verified token"""
    id: int
    username: str
    exp: int


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    """
    Issues and verifies HS256 bearer tokens.

    Tokens are stateless: there is no revocation list, so a token stays valid
    until its expiry. Expiry is exclusive, a token is rejected at or after
    its ``exp`` instant.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=7),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta
        self._clock = clock or _utcnow

    def issue(self, user_id: int, username: str) -> str:
        expire = int(self._clock().timestamp() + self.expires_delta.total_seconds())
        to_encode = {"id": user_id, "username": username, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims(**payload)
        except (JWTError, ValidationError, TypeError) as e:
            raise InvalidToken() from e

        if self._clock().timestamp() >= claims.exp:
            raise InvalidToken()
        return claims
