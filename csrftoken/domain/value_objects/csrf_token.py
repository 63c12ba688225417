"""CSRF token value object.

Wraps the raw bytes of a token that has passed structural checks: it has
the configured length and every salt byte belongs to the token alphabet.
Whether the digest region is genuine is decided by the authenticator, not
here.
"""

from dataclasses import dataclass
from typing import ClassVar, Union

from csrftoken.core.exceptions import InvalidTokenError
from csrftoken.domain.value_objects.alphabet import BITS_PER_CHARACTER, is_alphabet_byte


@dataclass(frozen=True)
class CsrfToken:
    """A structurally valid anti-forgery token.

    The first ``len(value) - len(value) // 2`` bytes are the digest region,
    the remaining ``len(value) // 2`` bytes are the salt.

    Attributes:
        value: The token bytes
    """

    value: bytes

    # Output size of HMAC-SHA512; digest characters beyond this add nothing.
    DIGEST_BITS: ClassVar[int] = 512
    MASK_VISIBLE_CHARS: ClassVar[int] = 4

    @staticmethod
    def salt_length(token_length: int) -> int:
        return token_length // 2

    @classmethod
    def parse(cls, presented: Union[str, bytes], token_length: int) -> "CsrfToken":
        """Check a presented token's structure and wrap it.

        Length is measured in bytes of the UTF-8 form, so a token containing
        non-ASCII text can never pass as a token of the right size. Anything
        that is not text or bytes has no usable length at all.

        Args:
            presented: Token as received from the client
            token_length: Configured token length

        Returns:
            CsrfToken: Token whose salt region is safe to feed to the encoder

        Raises:
            InvalidTokenError: ``invalid_length`` or ``invalid_character``
        """
        if isinstance(presented, str):
            raw = presented.encode("utf-8", "surrogatepass")
        elif isinstance(presented, (bytes, bytearray, memoryview)):
            raw = bytes(presented)
        elif presented is None:
            raw = b""
        else:
            raise InvalidTokenError(
                f"Invalid token type: {type(presented).__name__}", code="invalid_length"
            )

        if len(raw) != token_length:
            raise InvalidTokenError(
                f"Invalid token length: {len(raw)}", code="invalid_length"
            )

        for byte in raw[len(raw) - cls.salt_length(len(raw)):]:
            if not is_alphabet_byte(byte):
                raise InvalidTokenError(
                    f"Invalid token character: {byte:#04x}", code="invalid_character"
                )

        return cls(value=raw)

    @property
    def digest(self) -> bytes:
        return self.value[: len(self.value) - self.salt_length(len(self.value))]

    @property
    def salt(self) -> bytes:
        return self.value[len(self.value) - self.salt_length(len(self.value)):]

    def __str__(self) -> str:
        return self.value.decode("ascii", "replace")

    @classmethod
    def mask_presented(cls, presented) -> str:
        """Masked form of a raw presented token, whatever its type."""
        if isinstance(presented, str):
            text = presented
        elif isinstance(presented, (bytes, bytearray, memoryview)):
            text = bytes(presented).decode("ascii", "replace")
        else:
            return f"<{type(presented).__name__}>"
        return f"{text[:cls.MASK_VISIBLE_CHARS]}..."

    def mask_for_logging(self) -> str:
        """Get masked token for safe logging.

        Returns:
            str: Token with only its first few characters visible
        """
        return self.mask_presented(self.value)

    def get_security_metrics(self) -> dict:
        """Entropy figures for this token's shape (for monitoring).

        Each alphabet character carries log2(66) bits, about 6.04.
        """
        digest_bits = min(len(self.digest) * BITS_PER_CHARACTER, self.DIGEST_BITS)
        return {
            "length": len(self.value),
            "digest_length": len(self.digest),
            "salt_length": len(self.salt),
            "digest_entropy_bits": round(digest_bits, 2),
            "salt_entropy_bits": round(len(self.salt) * BITS_PER_CHARACTER, 2),
        }
