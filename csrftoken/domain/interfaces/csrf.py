"""Anti-forgery token service interface.

Request-handling layers depend on this abstraction rather than on a
concrete authenticator, so they can be tested with a stub and the token
scheme can change without touching them.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Union


class ICsrfTokenService(ABC):
    """Issues and checks tokens bound to a session and a time window.

    Implementations keep no record of issued tokens: validity is
    recomputed from the presented token, the session and the clock.
    """

    @abstractmethod
    def generate_token(
        self,
        now: Optional[datetime] = None,
        session: Union[str, bytes] = b"",
    ) -> str:
        """Issues a fresh token for `session`.

        Args:
            now: Current time (timezone-aware). Defaults to the system clock.
            session: Identifier that uniquely names the user's session.

        Returns:
            A printable, URL-safe token.
        """
        raise NotImplementedError

    @abstractmethod
    def validate_token(
        self,
        now: Optional[datetime] = None,
        session: Union[str, bytes] = b"",
        token: Union[str, bytes] = "",
    ) -> bool:
        """Checks whether `token` was issued for `session` recently enough.

        Malformed input is never an error; it simply is not a valid token.

        Returns:
            True if the token is genuine and within its lifetime.
        """
        raise NotImplementedError
