"""Abstract base class for all entropy sources.

Every entropy source, whether OS randomness, a device file or an in-memory
test buffer, implements this interface. The ABC provides a default
``get_random_float64()`` that delegates to ``get_random_bytes()``, a
concrete ``health_check()`` method and context-manager support. Subclasses
must implement the four abstract members: ``name``, ``is_available``,
``get_random_bytes()``, and ``close()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from csrng.exceptions import EntropyUnavailableError

# Bytes consumed per float in the vectorized path; 7 bytes cover the
# 53-bit mantissa of an IEEE-754 double.
_FLOAT_BYTES = 7
_FLOAT_BITS = 53
_FLOAT_MASK = np.uint64((1 << _FLOAT_BITS) - 1)
_FLOAT_SCALE = float(1 << _FLOAT_BITS)


class EntropySource(ABC):
    """Abstract base for all entropy sources.

    Implementations must provide random bytes on demand and must never
    cache, buffer or reseed on behalf of the caller: every byte returned
    by ``get_random_bytes()`` is fresh output of the underlying provider.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'system'``, ``'reader'``)."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the source can currently provide entropy."""

    @abstractmethod
    def get_random_bytes(self, n: int) -> bytes:
        """Return exactly *n* random bytes.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            EntropyUnavailableError: If the source cannot provide *n* bytes.
        """

    def get_random_float64(
        self,
        shape: tuple[int, ...],
        out: np.ndarray | None = None,
    ) -> np.ndarray:
        """Return random float64 values in [0, 1).

        All bytes are fetched with a single ``get_random_bytes()`` call.
        Each value is built from 7 little-endian bytes masked to 53 bits
        and scaled by ``2**-53``, so every value has the same distribution
        as a scalar 53-bit draw and is strictly below 1.0.

        If *out* is provided, the result is written into it (zero-allocation
        hot path). If *out* is ``None``, a new array is allocated and returned.

        Args:
            shape: Desired output shape.
            out: Optional pre-allocated array to write into.

        Returns:
            Array of float64 values in [0, 1).
        """
        total = 1
        for dim in shape:
            total *= dim
        raw = self.get_random_bytes(total * _FLOAT_BYTES)
        if len(raw) != total * _FLOAT_BYTES:
            raise EntropyUnavailableError(
                f"Entropy source {self.name!r} returned {len(raw)} bytes, "
                f"expected {total * _FLOAT_BYTES}"
            )
        padded = np.zeros((total, 8), dtype=np.uint8)
        if total:
            padded[:, :_FLOAT_BYTES] = np.frombuffer(raw, dtype=np.uint8).reshape(
                total, _FLOAT_BYTES
            )
        ints = padded.view("<u8").reshape(total) & _FLOAT_MASK
        values = ints.astype(np.float64) / _FLOAT_SCALE
        if out is not None:
            np.copyto(out, values.reshape(shape))
            return out
        return values.reshape(shape)

    @abstractmethod
    def close(self) -> None:
        """Release resources (file handles, connections)."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with at least ``'source'`` and ``'healthy'`` keys.
        """
        return {"source": self.name, "healthy": self.is_available}

    def __enter__(self) -> EntropySource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
