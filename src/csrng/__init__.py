"""csrng: unbiased cryptographically secure random sampling.

Integers, floats, permutations and subsets drawn from any byte-oriented
entropy source without modulo bias. Every operation comes in two forms:
``*_from(source, ...)`` takes the source explicitly, and the bare name
uses the process-wide default generator (``os.urandom()`` unless
configured otherwise via ``CSRNG_*`` environment variables)::

    import csrng

    csrng.intn(6)                                   # default source
    csrng.intn_from(csrng.SystemEntropySource(), 6) # explicit source
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("csrng")
except PackageNotFoundError:
    __version__ = "0.0.0"

from typing import TYPE_CHECKING

from csrng.bits import min_bytes, uint64_bits_from
from csrng.config import CSRNGConfig, validate_config
from csrng.entropy import (
    EntropySource,
    EntropySourceRegistry,
    FallbackEntropySource,
    FixedBytesSource,
    ReaderEntropySource,
    SystemEntropySource,
    register_entropy_source,
)
from csrng.exceptions import (
    ConfigValidationError,
    CSRNGError,
    EntropyUnavailableError,
    InvalidArgumentError,
    RejectionLimitError,
)
from csrng.generator import (
    SecureRandom,
    build_entropy_source,
    get_default_generator,
    reset_default_generator,
)
from csrng.reduce import intn_from
from csrng.samplers import float64_array_from, float64_from, perm_from, sample_from

if TYPE_CHECKING:
    import numpy as np


def uint64_bits(n: int) -> int:
    """Return a random int in ``[0, 2**n)`` from the default source."""
    return get_default_generator().uint64_bits(n)


def intn(n: int) -> int:
    """Return a uniform int in ``[0, n)`` from the default source."""
    return get_default_generator().intn(n)


def float64() -> float:
    """Return a uniform float in ``[0.0, 1.0)`` from the default source."""
    return get_default_generator().float64()


def float64_array(shape: tuple[int, ...], out: np.ndarray | None = None) -> np.ndarray:
    """Return an array of uniform floats in ``[0.0, 1.0)`` from the default source."""
    return get_default_generator().float64_array(shape, out=out)


def perm(n: int) -> list[int]:
    """Return a random permutation of ``range(n)`` from the default source."""
    return get_default_generator().perm(n)


def sample(n: int, k: int) -> list[int]:
    """Return ``min(k, n)`` distinct ints from ``range(n)`` using the default source."""
    return get_default_generator().sample(n, k)


__all__ = [
    "CSRNGConfig",
    "CSRNGError",
    "ConfigValidationError",
    "EntropySource",
    "EntropySourceRegistry",
    "EntropyUnavailableError",
    "FallbackEntropySource",
    "FixedBytesSource",
    "InvalidArgumentError",
    "ReaderEntropySource",
    "RejectionLimitError",
    "SecureRandom",
    "SystemEntropySource",
    "__version__",
    "build_entropy_source",
    "float64",
    "float64_array",
    "float64_array_from",
    "float64_from",
    "get_default_generator",
    "intn",
    "intn_from",
    "min_bytes",
    "perm",
    "perm_from",
    "register_entropy_source",
    "reset_default_generator",
    "sample",
    "sample_from",
    "uint64_bits",
    "uint64_bits_from",
    "validate_config",
]
