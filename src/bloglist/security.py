"""Password hashing and login tokens."""

from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt
from passlib.context import CryptContext

from bloglist.errors import AuthenticationError, ConfigurationError

ALGORITHM = "HS256"


class PasswordHasher:
    """Salted bcrypt hashing. Every call to ``hash`` draws a fresh salt.

    ``bcrypt_sha256`` pre-hashes the password, so bytes past bcrypt's 72-byte
    input limit still count.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(
            schemes=["bcrypt_sha256"], deprecated="auto", bcrypt_sha256__rounds=rounds
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self._context.verify(password, password_hash)


def create_access_token(
    claims: dict[str, Any], secret_key: str | None, expires_minutes: int = 60
) -> str:
    if not secret_key:
        raise ConfigurationError("SECRET_KEY is not set")
    to_encode = claims.copy()
    to_encode["exp"] = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str | None) -> dict[str, Any]:
    if not secret_key:
        raise ConfigurationError("SECRET_KEY is not set")
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthenticationError("invalid token") from exc
