"""Anti-forgery token services."""

from .authenticator import Authenticator
from .encoder import TokenEncoder

__all__ = ["Authenticator", "TokenEncoder"]
