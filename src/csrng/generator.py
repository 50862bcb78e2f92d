"""Source-bound generator and the process-wide default instance.

:class:`SecureRandom` binds one entropy source to the sampling functions,
so callers inject the source once instead of passing it to every call.
:func:`get_default_generator` lazily builds the instance behind the
package-level convenience functions from :class:`~csrng.config.CSRNGConfig`.
"""

from __future__ import annotations

import functools
import inspect
import logging
import threading
from typing import TYPE_CHECKING

from csrng.bits import uint64_bits_from
from csrng.config import CSRNGConfig, validate_config
from csrng.entropy import (
    EntropySourceRegistry,
    FallbackEntropySource,
    ReaderEntropySource,
    SystemEntropySource,
)
from csrng.reduce import intn_from
from csrng.samplers import float64_array_from, float64_from, perm_from, sample_from

if TYPE_CHECKING:
    import numpy as np

    from csrng.entropy.base import EntropySource

logger = logging.getLogger("csrng")

# Serialises building and resetting the default generator.
_default_lock = threading.Lock()


class SecureRandom:
    """Sampling methods bound to a single entropy source.

    Holds no state besides the source and the rejection cap, so an
    instance is as thread-safe as its source.

    Args:
        source: Entropy source for every draw. Defaults to a new
            :class:`~csrng.entropy.system.SystemEntropySource`.
        max_rejections: Rejection cap forwarded to the range reducer
            (``0`` disables it).
    """

    def __init__(self, source: EntropySource | None = None, max_rejections: int = 0) -> None:
        self._source = source if source is not None else SystemEntropySource()
        self._max_rejections = max_rejections

    @property
    def source(self) -> EntropySource:
        return self._source

    @property
    def max_rejections(self) -> int:
        return self._max_rejections

    def uint64_bits(self, n: int) -> int:
        """Return a random int in ``[0, 2**n)``, ``0 <= n <= 64``."""
        return uint64_bits_from(self._source, n)

    def intn(self, n: int) -> int:
        """Return a uniform int in ``[0, n)``."""
        return intn_from(self._source, n, self._max_rejections)

    def float64(self) -> float:
        """Return a uniform float in ``[0.0, 1.0)``."""
        return float64_from(self._source)

    def float64_array(self, shape: tuple[int, ...], out: np.ndarray | None = None) -> np.ndarray:
        """Return an array of uniform floats in ``[0.0, 1.0)``, optionally into *out*."""
        return float64_array_from(self._source, shape, out=out)

    def perm(self, n: int) -> list[int]:
        """Return a random permutation of ``range(n)``."""
        return perm_from(self._source, n, self._max_rejections)

    def sample(self, n: int, k: int) -> list[int]:
        """Return ``min(k, n)`` distinct ints from ``range(n)``."""
        return sample_from(self._source, n, k, self._max_rejections)

    def close(self) -> None:
        """Close the underlying source."""
        self._source.close()

    def __enter__(self) -> SecureRandom:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"SecureRandom(source={self._source.name!r}, max_rejections={self._max_rejections})"


def _accepts_config(cls: type) -> bool:
    """Check whether a source constructor takes a ``config`` first argument.

    Plugin sources that need settings beyond their own defaults declare a
    first parameter named ``config`` or annotated as ``CSRNGConfig``.
    """
    try:
        sig = inspect.signature(cls)
    except (ValueError, TypeError):
        return False

    for param in sig.parameters.values():
        annotation = param.annotation
        if annotation is inspect.Parameter.empty:
            return param.name == "config"
        return annotation is CSRNGConfig or (
            isinstance(annotation, str) and "CSRNGConfig" in annotation
        )
    return False


def build_entropy_source(config: CSRNGConfig) -> EntropySource:
    """Build the entropy source described by *config*.

    Args:
        config: Settings naming the source and the fallback mode.

    Returns:
        An EntropySource, wrapped in FallbackEntropySource when
        ``fallback_mode`` is ``'system'``.

    Raises:
        ConfigValidationError: If the configuration is invalid.
    """
    validate_config(config)
    source_cls = EntropySourceRegistry.get(config.entropy_source_type)

    if source_cls is ReaderEntropySource:
        primary: EntropySource = ReaderEntropySource(path=config.reader_path)
    elif _accepts_config(source_cls):
        primary = source_cls(config)  # type: ignore[call-arg]
    else:
        primary = source_cls()

    if config.fallback_mode == "error":
        return primary
    return FallbackEntropySource(primary, SystemEntropySource())


@functools.lru_cache(maxsize=1)
def _build_default_generator() -> SecureRandom:
    config = CSRNGConfig()
    source = build_entropy_source(config)
    logger.debug(
        "Built default generator: source=%s max_rejections=%d",
        source.name,
        config.max_rejections,
    )
    return SecureRandom(source, max_rejections=config.max_rejections)


def get_default_generator() -> SecureRandom:
    """Return the process-wide generator, building it on first use.

    Settings come from the environment (``CSRNG_*``) at the time of the
    first call. Concurrent first calls wait for a single build, so only one
    source is ever opened. Use :func:`reset_default_generator` to rebuild it.
    """
    with _default_lock:
        return _build_default_generator()


def reset_default_generator() -> None:
    """Close the default generator's source and forget the instance."""
    with _default_lock:
        if _build_default_generator.cache_info().currsize:
            _build_default_generator().close()
        _build_default_generator.cache_clear()
