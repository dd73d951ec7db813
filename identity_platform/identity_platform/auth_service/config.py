"""
Configuration management for the authentication service
"""
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEV_JWT_SECRET = "change-this-secret-in-prod-0123456789abcdef"


class Settings(BaseSettings):
    """Auth service configuration loaded from environment variables"""

    # Token signing
    JWT_SECRET: str = Field(DEV_JWT_SECRET, min_length=1)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    TOKEN_TTL_SECONDS: int = Field(7200, ge=0)

    # Password hashing
    PASSWORD_HASH_SCHEME: str = "pbkdf2_sha256"
    PASSWORD_HASH_ROUNDS: int = Field(29000, ge=1)

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./app.db"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        frozen=True,
    )

    @property
    def uses_dev_secret(self) -> bool:
        return self.JWT_SECRET == DEV_JWT_SECRET


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once."""
    return Settings()
