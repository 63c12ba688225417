"""Stateless, session-bound anti-forgery tokens."""

from csrftoken.core.exceptions import ConfigurationError, CsrfTokenError, InvalidTokenError
from csrftoken.domain.interfaces.csrf import ICsrfTokenService
from csrftoken.domain.services.csrf.authenticator import Authenticator
from csrftoken.domain.value_objects.alphabet import ALPHABET
from csrftoken.domain.value_objects.csrf_token import CsrfToken
from csrftoken.infrastructure.dependency_injection.csrf_dependencies import (
    get_authenticator,
    reset_authenticator,
)

__version__ = "0.1.0"

__all__ = [
    "ALPHABET",
    "Authenticator",
    "ConfigurationError",
    "CsrfToken",
    "CsrfTokenError",
    "ICsrfTokenService",
    "InvalidTokenError",
    "get_authenticator",
    "reset_authenticator",
]
