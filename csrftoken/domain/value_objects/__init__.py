"""Domain value objects for anti-forgery tokens."""

from .alphabet import ALPHABET, ALPHABET_SIZE, BITS_PER_CHARACTER
from .csrf_token import CsrfToken

__all__ = [
    "ALPHABET",
    "ALPHABET_SIZE",
    "BITS_PER_CHARACTER",
    "CsrfToken",
]
