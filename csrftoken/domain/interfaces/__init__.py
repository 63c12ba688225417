"""Domain interfaces."""

from .csrf import ICsrfTokenService

__all__ = ["ICsrfTokenService"]
