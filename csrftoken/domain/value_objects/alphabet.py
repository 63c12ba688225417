"""Token alphabet and base conversion.

The alphabet is 66 printable ASCII characters that need no escaping in a
URL. It is kept in ascending byte order: salt validation looks characters
up with a binary search, so any change to its contents must keep it sorted.
"""

import math
import string
from bisect import bisect_left
from typing import Final

ALPHABET: Final[bytes] = (
    b"-."
    + string.digits.encode("ascii")
    + string.ascii_uppercase.encode("ascii")
    + b"_"
    + string.ascii_lowercase.encode("ascii")
    + b"~"
)
ALPHABET_SIZE: Final[int] = len(ALPHABET)

# Entropy carried by one uniformly chosen character.
BITS_PER_CHARACTER: Final[float] = math.log2(ALPHABET_SIZE)


def is_alphabet_byte(value: int) -> bool:
    """Return True if `value` is the byte of an alphabet character."""
    index = bisect_left(ALPHABET, value)
    return index < ALPHABET_SIZE and ALPHABET[index] == value


def encode_base(number: int, length: int) -> bytes:
    """Render `number` as exactly `length` alphabet characters.

    Digits are emitted in the order the divisions happen, least significant
    first. Once `number` is exhausted the remaining positions are filled
    with the zero digit ``-``.

    Args:
        number: Non-negative integer of any size
        length: Number of characters to produce

    Returns:
        bytes: `length` alphabet characters

    Raises:
        ValueError: If `number` or `length` is negative
    """
    if number < 0:
        raise ValueError("Number to encode must be non-negative")
    if length < 0:
        raise ValueError("Encoded length must be non-negative")

    digits = bytearray(length)
    for position in range(length):
        number, remainder = divmod(number, ALPHABET_SIZE)
        digits[position] = ALPHABET[abs(remainder)]
    return bytes(digits)
