"""System entropy source using ``os.urandom()``.

This is the default source. It reads the kernel CSPRNG (``getrandom(2)``
where available) and may block only while the kernel pool is unseeded
early in boot.
"""

from __future__ import annotations

import os

from csrng.entropy.base import EntropySource
from csrng.entropy.registry import register_entropy_source
from csrng.exceptions import EntropyUnavailableError


@register_entropy_source("system")
class SystemEntropySource(EntropySource):
    """``os.urandom()`` wrapper: the production default, cryptographically secure.

    Holds no state, so a single instance may be shared between threads.
    """

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    @property
    def is_available(self) -> bool:
        """Always ``True``; failures surface from ``get_random_bytes()``."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the OS CSPRNG.

        Raises:
            EntropyUnavailableError: If the OS reports an error.
        """
        try:
            return os.urandom(n)
        except OSError as exc:
            raise EntropyUnavailableError(f"os.urandom({n}) failed: {exc}") from exc

    def close(self) -> None:
        """No-op — no resources to release."""
