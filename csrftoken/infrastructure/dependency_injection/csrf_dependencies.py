"""Process-wide token service wiring.

Request-handling code asks for an `ICsrfTokenService` here instead of
building one, so every handler in a process signs and checks tokens with
the same key, length and lifetime.
"""

from functools import lru_cache

import structlog

from csrftoken.core.config.settings import get_settings
from csrftoken.domain.interfaces.csrf import ICsrfTokenService
from csrftoken.domain.services.csrf.authenticator import Authenticator

logger = structlog.get_logger(__name__)


@lru_cache
def get_authenticator() -> ICsrfTokenService:
    """Return the shared authenticator built from the current settings.

    Raises:
        ConfigurationError: If the settings describe an unusable authenticator
    """
    authenticator = Authenticator.from_settings(get_settings())
    logger.info(
        "CSRF authenticator initialized",
        token_length=authenticator.token_length,
        lifetime_seconds=authenticator.lifetime.total_seconds(),
        security_bits=round(authenticator.security_bits, 2),
    )
    return authenticator


def reset_authenticator() -> None:
    """Drop the cached settings and authenticator, e.g. after a key change."""
    get_authenticator.cache_clear()
    get_settings.cache_clear()
