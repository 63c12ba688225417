"""Keyed digest encoder for anti-forgery tokens.

A token is the HMAC-SHA512 of (window counter, session, salt) written out
in the token alphabet, followed by the salt itself:

    +------------------------------+-----------------+
    | digest region                | salt region     |
    | token_length - len(salt)     | len(salt)       |
    +------------------------------+-----------------+

The digest region holds least-significant base-66 digits first. A 512 bit
digest fills about 85 characters; beyond that the region is padded with
``-`` and adds no security.
"""

import hashlib
import hmac

from csrftoken.domain.value_objects.alphabet import encode_base

COUNTER_SIZE = 8
_COUNTER_MASK = (1 << (COUNTER_SIZE * 8)) - 1


def serialize_counter(counter: int) -> bytes:
    """Encode `counter` as 8 big-endian bytes in two's complement.

    Counters outside the signed 64-bit range wrap modulo 2**64.
    """
    return (counter & _COUNTER_MASK).to_bytes(COUNTER_SIZE, "big")


class TokenEncoder:
    """Deterministic transform from (counter, session, salt) to a token.

    Holds the key and the token length and nothing else; `encode` is a pure
    function of its arguments, so one encoder can serve any number of
    threads at once.
    """

    def __init__(self, key: bytes, token_length: int):
        self._key = key
        self._token_length = token_length

    @property
    def token_length(self) -> int:
        return self._token_length

    def digest_length(self, salt: bytes) -> int:
        return self._token_length - len(salt)

    def encode(self, counter: int, session: bytes, salt: bytes) -> bytes:
        """Build the token for one window, session and salt.

        Args:
            counter: Time window counter
            session: Session identifier bytes
            salt: Salt bytes, already restricted to the alphabet

        Returns:
            bytes: Token of exactly `token_length` characters
        """
        mac = hmac.new(self._key, digestmod=hashlib.sha512)
        mac.update(serialize_counter(counter))
        mac.update(session)
        mac.update(salt)

        number = int.from_bytes(mac.digest(), "big")
        return encode_base(number, self.digest_length(salt)) + salt
