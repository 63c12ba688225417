"""Conversion of wall-clock instants into token time windows.

A window counter is the number of whole lifetimes elapsed since the Unix
epoch. Tokens are bound to a counter rather than to an instant, which is
what lets validation recompute them without storing anything.
"""

from datetime import datetime, timedelta, timezone

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_ONE_MICROSECOND = timedelta(microseconds=1)
_NANOSECONDS_PER_MICROSECOND = 1000


def to_unix_nanoseconds(moment: datetime) -> int:
    """Exact nanoseconds between the Unix epoch and `moment`.

    Raises:
        ValueError: If `moment` is not timezone-aware
    """
    if moment.tzinfo is None or moment.utcoffset() is None:
        raise ValueError("Timestamp must be timezone-aware")
    return (moment - EPOCH) // _ONE_MICROSECOND * _NANOSECONDS_PER_MICROSECOND


def lifetime_nanoseconds(lifetime: timedelta) -> int:
    """Length of `lifetime` in nanoseconds.

    Raises:
        ValueError: If `lifetime` is not positive
    """
    if lifetime <= timedelta(0):
        raise ValueError("Token lifetime must be positive")
    return lifetime // _ONE_MICROSECOND * _NANOSECONDS_PER_MICROSECOND


def window_counter(moment: datetime, lifetime: timedelta) -> int:
    """Index of the lifetime-sized window containing `moment`.

    Floor division, so instants before the epoch land in negative windows
    and each window spans ``[n * lifetime, (n + 1) * lifetime)``.
    """
    return to_unix_nanoseconds(moment) // lifetime_nanoseconds(lifetime)
