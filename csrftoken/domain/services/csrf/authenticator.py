"""Stateless anti-forgery token authenticator.

Tokens are bound to a session identifier and a coarse time window and are
never stored. Validation extracts the salt from the presented token,
recomputes the token for the current and the previous window and accepts
an exact match with either. A token therefore stays valid for at least one
lifetime and at most two.
"""

import hmac
import random
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import ClassVar, Optional, Union

import structlog

from csrftoken.core.exceptions import ConfigurationError, InvalidTokenError
from csrftoken.domain.interfaces.csrf import ICsrfTokenService
from csrftoken.domain.services.csrf.encoder import TokenEncoder
from csrftoken.domain.services.csrf.time_window import window_counter
from csrftoken.domain.value_objects.alphabet import ALPHABET, BITS_PER_CHARACTER
from csrftoken.domain.value_objects.csrf_token import CsrfToken

logger = structlog.get_logger(__name__)

# SystemRandom draws from os.urandom and is safe to share between threads.
_system_random = secrets.SystemRandom()


def _session_bytes(session: Union[str, bytes]) -> bytes:
    if isinstance(session, str):
        return session.encode("utf-8")
    if isinstance(session, (bytes, bytearray, memoryview)):
        return bytes(session)
    raise TypeError(f"Session identifier must be str or bytes, not {type(session).__name__}")


@dataclass(frozen=True)
class Authenticator(ICsrfTokenService):
    """Issues and validates session-bound anti-forgery tokens.

    The configuration is immutable once built and all operations are pure
    functions of their arguments, so a single instance can be shared by
    any number of threads without locking.

    Attributes:
        key: Secret key, roughly 64 bytes of unguessable data. A str is
            UTF-8 encoded.
        token_length: Characters per token. Each carries log2(66) ~ 6.04
            bits; 12 to 40 is the recommended range and lengths past 168
            add no security.
        lifetime: Tokens remain valid for at least `lifetime` and less than
            twice `lifetime`.
        rng: Source for salt characters. Defaults to a shared SystemRandom.
    """

    key: bytes = field(repr=False)
    token_length: int
    lifetime: timedelta
    rng: Optional[random.Random] = field(default=None, repr=False, compare=False)

    MIN_TOKEN_LENGTH: ClassVar[int] = 2
    RECOMMENDED_MIN_TOKEN_LENGTH: ClassVar[int] = 12
    MAX_EFFECTIVE_TOKEN_LENGTH: ClassVar[int] = 168
    RECOMMENDED_KEY_LENGTH: ClassVar[int] = 64

    def __post_init__(self) -> None:
        """Validate configuration on construction.

        Raises:
            ConfigurationError: If key, token length or lifetime is unusable
        """
        if isinstance(self.key, str):
            object.__setattr__(self, "key", self.key.encode("utf-8"))
        elif isinstance(self.key, (bytearray, memoryview)):
            object.__setattr__(self, "key", bytes(self.key))
        self._validate_key()
        self._validate_token_length()
        self._validate_lifetime()

        object.__setattr__(self, "_encoder", TokenEncoder(self.key, self.token_length))

    def _validate_key(self) -> None:
        if not isinstance(self.key, bytes):
            raise ConfigurationError("Secret key must be bytes or str")
        if not self.key:
            raise ConfigurationError("Secret key cannot be empty")
        if len(self.key) < self.RECOMMENDED_KEY_LENGTH:
            logger.warning(
                "CSRF secret key is shorter than recommended",
                key_length=len(self.key),
                recommended_length=self.RECOMMENDED_KEY_LENGTH,
            )

    def _validate_token_length(self) -> None:
        if isinstance(self.token_length, bool) or not isinstance(self.token_length, int):
            raise ConfigurationError("Token length must be an integer")
        if self.token_length < self.MIN_TOKEN_LENGTH:
            raise ConfigurationError(
                f"Token length must be at least {self.MIN_TOKEN_LENGTH}, got {self.token_length}"
            )
        if not (
            self.RECOMMENDED_MIN_TOKEN_LENGTH
            <= self.token_length
            <= self.MAX_EFFECTIVE_TOKEN_LENGTH
        ):
            logger.warning(
                "CSRF token length is outside the recommended range",
                token_length=self.token_length,
                recommended_min=self.RECOMMENDED_MIN_TOKEN_LENGTH,
                effective_max=self.MAX_EFFECTIVE_TOKEN_LENGTH,
            )

    def _validate_lifetime(self) -> None:
        if not isinstance(self.lifetime, timedelta):
            raise ConfigurationError("Token lifetime must be a timedelta")
        if self.lifetime <= timedelta(0):
            raise ConfigurationError("Token lifetime must be positive")

    @classmethod
    def from_settings(cls, settings) -> "Authenticator":
        """Build an authenticator from loaded `CsrfSettings`."""
        return cls(
            key=settings.CSRF_SECRET_KEY.get_secret_value(),
            token_length=settings.CSRF_TOKEN_LENGTH,
            lifetime=settings.lifetime,
        )

    @property
    def salt_length(self) -> int:
        return CsrfToken.salt_length(self.token_length)

    @property
    def security_bits(self) -> float:
        """Bits of digest entropy an attacker has to guess."""
        digest_length = self.token_length - self.salt_length
        return min(digest_length * BITS_PER_CHARACTER, CsrfToken.DIGEST_BITS)

    def generate_token(
        self,
        now: Optional[datetime] = None,
        session: Union[str, bytes] = b"",
    ) -> str:
        """Issue a new token for `session`.

        Args:
            now: Current time, timezone-aware. Defaults to the system clock.
            session: Identifier of the user's session, such as a session ID
                or username. Validation must be given the same value.

        Returns:
            str: Token of exactly `token_length` URL-safe characters
        """
        moment = now or datetime.now(timezone.utc)
        rng = self.rng or _system_random
        salt = bytes(rng.choice(ALPHABET) for _ in range(self.salt_length))

        counter = window_counter(moment, self.lifetime)
        token = self._encoder.encode(counter, _session_bytes(session), salt)

        logger.debug(
            "CSRF token generated",
            counter=counter,
            token=CsrfToken(value=token).mask_for_logging(),
        )
        return token.decode("ascii")

    def validate_token(
        self,
        now: Optional[datetime] = None,
        session: Union[str, bytes] = b"",
        token: Union[str, bytes] = "",
    ) -> bool:
        """Check that `token` was issued for `session` in this window or the last.

        Never raises for a malformed token: wrong length and foreign salt
        characters are logged and answered with False before any digest is
        computed. Both candidate windows are always compared, in constant
        time.

        Args:
            now: Current time, timezone-aware. Defaults to the system clock.
            session: The identifier the token was generated with.
            token: Token as presented by the client.

        Returns:
            bool: True if the token is genuine and not expired
        """
        try:
            presented = CsrfToken.parse(token, self.token_length)
        except InvalidTokenError as e:
            logger.warning(
                "CSRF token rejected",
                reason=e.code,
                detail=e.message,
                token=CsrfToken.mask_presented(token),
            )
            return False

        moment = now or datetime.now(timezone.utc)
        session_bytes = _session_bytes(session)
        counter = window_counter(moment, self.lifetime)

        current = self._encoder.encode(counter, session_bytes, presented.salt)
        previous = self._encoder.encode(counter - 1, session_bytes, presented.salt)
        matches_current = hmac.compare_digest(presented.value, current)
        matches_previous = hmac.compare_digest(presented.value, previous)

        if matches_current or matches_previous:
            return True

        logger.debug(
            "CSRF token rejected",
            reason="digest_mismatch",
            token=presented.mask_for_logging(),
        )
        return False
