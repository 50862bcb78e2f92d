"""Bit extraction from an entropy source.

Reads the fewest whole bytes that cover a requested bit width and turns
them into an unsigned 64-bit value with only the low bits populated.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING

from csrng.exceptions import EntropyUnavailableError, InvalidArgumentError

if TYPE_CHECKING:
    from csrng.entropy.base import EntropySource

MAX_BITS = 64
"""Widest value the extractor can produce."""

UINT64_MAX = (1 << MAX_BITS) - 1
_WORD_BYTES = MAX_BITS // 8


def as_int(value: object, what: str) -> int:
    """Return *value* as a plain int.

    Anything implementing ``__index__`` is accepted, numpy integer scalars
    included. Floats, strings and bools are not.

    Raises:
        InvalidArgumentError: If *value* is not an integer.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(f"{what} must be an int, got {value!r}")
    try:
        return operator.index(value)  # type: ignore[arg-type]
    except TypeError:
        raise InvalidArgumentError(f"{what} must be an int, got {value!r}") from None


def min_bytes(n: int) -> int:
    """Return the minimum number of bytes needed to store *n* in binary.

    ``0`` needs no bytes at all; every other value needs
    ``ceil(n.bit_length() / 8)``.

    Args:
        n: An unsigned 64-bit value.

    Returns:
        A byte count in ``0..8``.

    Raises:
        InvalidArgumentError: If *n* is negative or wider than 64 bits.
    """
    n = as_int(n, "min_bytes() argument")
    if not 0 <= n <= UINT64_MAX:
        raise InvalidArgumentError(f"min_bytes() argument must be an unsigned 64-bit value, got {n}")
    return (n.bit_length() + 7) // 8


def uint64_bits_from(source: EntropySource, n: int) -> int:
    """Return a random value in ``[0, 2**n)`` read from *source*.

    Exactly ``ceil(n / 8)`` bytes are requested. They fill the low end of
    a zeroed 8-byte buffer that is then read as a little-endian unsigned
    64-bit integer, and bits at positions ``>= n`` are cleared.

    Args:
        source: Where the random bytes come from.
        n: Number of random low-order bits, ``0 <= n <= 64``.

    Returns:
        An int whose bits above position *n* are zero.

    Raises:
        InvalidArgumentError: If *n* is outside ``0..64``.
        EntropyUnavailableError: If *source* cannot deliver the bytes.
    """
    n = as_int(n, "Bit count")
    if not 0 <= n <= MAX_BITS:
        raise InvalidArgumentError(f"Cannot extract {n!r} bits; the limit is {MAX_BITS}")

    wanted = (n + 7) // 8
    data = source.get_random_bytes(wanted)
    if len(data) != wanted:
        raise EntropyUnavailableError(
            f"Entropy source {source.name!r} returned {len(data)} bytes, expected {wanted}"
        )

    buf = bytearray(_WORD_BYTES)
    buf[:wanted] = data
    r = int.from_bytes(buf, "little")

    # Full width needs no mask.
    if n == MAX_BITS:
        return r
    return r & ((1 << n) - 1)
