"""Entropy source subsystem for csrng.

Re-exports the ABC, registry, and all built-in source implementations
for convenient access::

    from csrng.entropy import EntropySource, EntropySourceRegistry
    from csrng.entropy import SystemEntropySource, FixedBytesSource
"""

from csrng.entropy.base import EntropySource
from csrng.entropy.fallback import FallbackEntropySource
from csrng.entropy.reader import FixedBytesSource, ReaderEntropySource
from csrng.entropy.registry import EntropySourceRegistry, register_entropy_source
from csrng.entropy.system import SystemEntropySource

__all__ = [
    "EntropySource",
    "EntropySourceRegistry",
    "FallbackEntropySource",
    "FixedBytesSource",
    "ReaderEntropySource",
    "SystemEntropySource",
    "register_entropy_source",
]
