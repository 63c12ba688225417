"""Token service settings.

Settings are loaded from environment variables and an optional `.env`
file, validated by pydantic, and exposed through the cached `get_settings`
factory. Nothing is read at import time, so the package can be imported
without any environment configured.

Security Note:
    - CSRF_SECRET_KEY must be unguessable (roughly 64 bytes of random data is
      recommended) and must never be logged or committed to version control.
    - Every process validating tokens must share the same key, token length
      and lifetime as the processes issuing them.
"""

import logging
from datetime import timedelta
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

MIN_SECRET_KEY_LENGTH = 32


class CsrfSettings(BaseSettings):
    """Defines the anti-forgery token configuration.

    Attributes:
        CSRF_SECRET_KEY: Secret key for the keyed digest.
        CSRF_TOKEN_LENGTH: Total token length in characters; half of it is salt.
        CSRF_TOKEN_LIFETIME_SECONDS: Minimum validity window. Tokens stay
            valid for at least this long and at most twice as long.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    CSRF_SECRET_KEY: SecretStr
    CSRF_TOKEN_LENGTH: int = Field(default=32, ge=2)
    CSRF_TOKEN_LIFETIME_SECONDS: int = Field(default=3600, gt=0)

    @field_validator("CSRF_SECRET_KEY")
    @classmethod
    def check_secret_key_length(cls, v: SecretStr) -> SecretStr:
        if len(v.get_secret_value()) < MIN_SECRET_KEY_LENGTH:
            raise ValueError(
                f"CSRF_SECRET_KEY must be at least {MIN_SECRET_KEY_LENGTH} characters"
            )
        return v

    @property
    def lifetime(self) -> timedelta:
        return timedelta(seconds=self.CSRF_TOKEN_LIFETIME_SECONDS)


@lru_cache
def get_settings() -> CsrfSettings:
    """Load and cache the settings for this process.

    Raises:
        pydantic.ValidationError: If CSRF_SECRET_KEY is missing or a value
            is out of range.
    """
    settings = CsrfSettings()
    logger.info(
        f"CSRF settings loaded for {settings.APP_ENV} environment "
        f"(token length {settings.CSRF_TOKEN_LENGTH}, "
        f"lifetime {settings.CSRF_TOKEN_LIFETIME_SECONDS}s)"
    )
    return settings
