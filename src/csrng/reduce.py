"""Bias-free reduction of random bits to an integer range.

Reducing a uniform value from ``[0, M)`` modulo ``n`` favours the first
``M % n`` results whenever ``M`` is not a multiple of ``n``. The range
reducer avoids that by drawing from the smallest byte-aligned range that
covers ``n`` and rejecting draws from the incomplete top interval.

Example with ``n = 65`` and one byte of entropy (``M = 256``)::

    0        65       130      195    256
    |        |        |        |      |
    |<0---64>|<0---64>|<0---64>|unused|

Draws below ``limit = 195`` map onto ``[0, 65)`` with ``r % 65``; draws
in ``[195, 256)`` are thrown away and redrawn.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from csrng.bits import as_int, min_bytes, uint64_bits_from
from csrng.exceptions import InvalidArgumentError, RejectionLimitError

if TYPE_CHECKING:
    from csrng.entropy.base import EntropySource

logger = logging.getLogger("csrng")

INT64_MAX = (1 << 63) - 1
"""Largest accepted range bound (a signed 64-bit int)."""


def rejection_limit(n: int, bits: int) -> int:
    """Return the largest multiple of *n* not above ``2**bits``.

    ``2**bits`` is held as an exact integer, including ``2**64``. The
    ``(M - n) % n`` form equals ``M % n`` and keeps every intermediate
    value inside the unsigned 64-bit range.
    """
    m = 1 << bits
    return m - (m - n) % n


def intn_from(source: EntropySource, n: int, max_rejections: int = 0) -> int:
    """Return a uniformly distributed int in ``[0, n)`` read from *source*.

    Args:
        source: Where the random bytes come from.
        n: Exclusive upper bound, ``1 <= n <= 2**63 - 1``.
        max_rejections: When positive, give up after this many
            consecutive rejected draws. ``0`` retries indefinitely; the
            rejection probability is below one half per draw, so the
            loop ends with probability one.

    Returns:
        An int ``r`` with ``0 <= r < n``.

    Raises:
        InvalidArgumentError: If *n* is not a positive signed 64-bit int.
        EntropyUnavailableError: Propagated unchanged from the extractor.
        RejectionLimitError: If *max_rejections* is exceeded.
    """
    n = as_int(n, "Range bound")
    if n <= 0:
        raise InvalidArgumentError(f"Range bound must be a positive int, got {n!r}")
    if n > INT64_MAX:
        raise InvalidArgumentError(f"Range bound {n} exceeds the signed 64-bit maximum")

    # Reads have byte granularity, so the width is always a multiple of 8.
    bits = min_bytes(n - 1) * 8

    if n & (n - 1) == 0:
        return uint64_bits_from(source, bits) & (n - 1)

    limit = rejection_limit(n, bits)
    rejected = 0
    while True:
        r = uint64_bits_from(source, bits)
        if r < limit:
            return r % n
        rejected += 1
        logger.debug("Rejected draw %d >= %d for n=%d (attempt %d)", r, limit, n, rejected)
        if 0 < max_rejections <= rejected:
            raise RejectionLimitError(
                f"{rejected} consecutive draws rejected for n={n} from source {source.name!r}"
            )
