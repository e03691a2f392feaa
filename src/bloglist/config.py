"""Application configuration via environment variables."""

from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

DEFAULT_USERNAME_MIN_LENGTH = 3
DEFAULT_PASSWORD_MIN_LENGTH = 3


class Settings(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = {"env_prefix": ""}

    # Server
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=3003, description="Server bind port")
    log_level: str = Field(default="info", description="Log level")

    # Store backend
    store_backend: Literal["memory", "redis"] = Field(
        default="memory", description="Document store backend: 'memory' or 'redis'"
    )
    redis_url: str | None = Field(
        default=None, description="Redis URL (required when STORE_BACKEND=redis)"
    )

    # Account policy
    username_min_length: int = Field(
        default=DEFAULT_USERNAME_MIN_LENGTH, ge=1, description="Minimum username length"
    )
    password_min_length: int = Field(
        default=DEFAULT_PASSWORD_MIN_LENGTH,
        ge=1,
        description="Minimum password length, checked before hashing",
    )
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, description="bcrypt cost factor")

    # Tokens
    secret_key: str | None = Field(
        default=None, description="HS256 signing key for login tokens"
    )
    token_expire_minutes: int = Field(default=60, ge=1, description="Login token lifetime")

    @model_validator(mode="after")
    def _check_store(self) -> "Settings":
        if self.store_backend == "redis" and not self.redis_url:
            raise ValueError("REDIS_URL is required when STORE_BACKEND=redis")
        return self
