"""Samplers derived from the range reducer.

Floats, permutations and k-subsets, each reading entropy only through
:func:`~csrng.bits.uint64_bits_from` and :func:`~csrng.reduce.intn_from`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from csrng.bits import as_int, uint64_bits_from
from csrng.exceptions import InvalidArgumentError
from csrng.reduce import intn_from

if TYPE_CHECKING:
    import numpy as np

    from csrng.entropy.base import EntropySource

FLOAT64_MANTISSA_BITS = 53
_FLOAT64_SCALE = float(1 << FLOAT64_MANTISSA_BITS)


def float64_from(source: EntropySource) -> float:
    """Return a uniformly distributed float in ``[0.0, 1.0)``.

    A 53-bit draw divided by ``2**53`` is exact in double precision, so
    results are evenly spaced by ``2**-53`` and never reach 1.0.
    """
    return uint64_bits_from(source, FLOAT64_MANTISSA_BITS) / _FLOAT64_SCALE


def float64_array_from(
    source: EntropySource,
    shape: tuple[int, ...],
    out: np.ndarray | None = None,
) -> np.ndarray:
    """Return an array of floats in ``[0.0, 1.0)`` with the given *shape*.

    All entropy is fetched in one request. See
    :meth:`~csrng.entropy.base.EntropySource.get_random_float64`.
    """
    if any(dim < 0 for dim in shape):
        raise InvalidArgumentError(f"Negative dimension in shape {shape}")
    return source.get_random_float64(shape, out=out)


def perm_from(source: EntropySource, n: int, max_rejections: int = 0) -> list[int]:
    """Return a uniformly random permutation of ``range(n)``.

    Inside-out Fisher–Yates: step ``i`` picks ``j`` in ``[0, i]``, moves
    the current occupant of slot ``j`` to slot ``i`` and puts ``i`` at
    ``j``. All ``n!`` orderings are equally likely.

    Raises:
        InvalidArgumentError: If *n* is not a non-negative int.
    """
    n = as_int(n, "Permutation size")
    if n < 0:
        raise InvalidArgumentError(f"Permutation size must be non-negative, got {n}")
    m = [0] * n
    for i in range(n):
        j = intn_from(source, i + 1, max_rejections)
        m[i] = m[j]
        m[j] = i
    return m


def sample_from(source: EntropySource, n: int, k: int, max_rejections: int = 0) -> list[int]:
    """Return ``min(k, n)`` distinct ints drawn from ``range(n)``.

    When more than half the range is wanted, the head of a full
    permutation is returned. Otherwise values are drawn one at a time and
    duplicates are skipped; the result then lists values in the order they
    were first drawn, which is not sorted.

    Raises:
        InvalidArgumentError: If *n* or *k* is not a non-negative int.
    """
    n = as_int(n, "Sample population size")
    k = as_int(k, "Sample size")
    if n < 0 or k < 0:
        raise InvalidArgumentError(f"Sample arguments must be non-negative, got n={n}, k={k}")
    k = min(k, n)

    if k > n // 2:
        return perm_from(source, n, max_rejections)[:k]

    chosen: list[int] = []
    seen: set[int] = set()
    while len(chosen) < k:
        r = intn_from(source, n, max_rejections)
        if r in seen:
            continue
        seen.add(r)
        chosen.append(r)
    return chosen
