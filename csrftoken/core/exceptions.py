"""Structured exception hierarchy for csrftoken.

Every exception carries a machine-readable `code` for programmatic handling
and a human-readable `message` for logging. Token validation never lets
these escape: they are raised while a presented token is being parsed and
collapsed into a plain ``False`` at the service boundary. Only
`ConfigurationError` reaches callers, when an authenticator is built from
unusable settings.
"""

from __future__ import annotations

from typing import Final

__all__: Final = [
    "CsrfTokenError",
    "ConfigurationError",
    "InvalidTokenError",
]


class CsrfTokenError(Exception):
    """Base exception class for all custom errors in csrftoken.

    Attributes:
        message (str): A human-readable error message, suitable for logging.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(CsrfTokenError):
    """Raised when an authenticator is configured with unusable values.

    This is a programming or deployment error, not a runtime condition:
    it is raised eagerly at construction so a bad key, length or lifetime
    never produces tokens.
    """

    def __init__(self, message: str, code: str = "configuration_error"):
        super().__init__(message, code)


class InvalidTokenError(CsrfTokenError):
    """Raised when a presented token is structurally malformed.

    The `code` names the cause: ``invalid_length`` when the token does not
    have the configured length, ``invalid_character`` when its salt region
    holds a byte outside the token alphabet.
    """

    def __init__(self, message: str, code: str = "invalid_token"):
        super().__init__(message, code)
