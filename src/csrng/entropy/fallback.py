"""Failover between two entropy sources.

The range reducer issues one byte request per draw, so a source outage
shows up as a burst of failures. ``FallbackEntropySource`` answers each
failed request from a second source and reports the outage once: a
WARNING when the primary first fails and an INFO line when it serves a
request again. Requests in between are logged at DEBUG.

Only :class:`~csrng.exceptions.EntropyUnavailableError` triggers the
switch. Any other exception from the primary is a bug in that source and
propagates.
"""

from __future__ import annotations

import logging
from typing import Any

from csrng.entropy.base import EntropySource
from csrng.exceptions import EntropyUnavailableError

logger = logging.getLogger("csrng")


class FallbackEntropySource(EntropySource):
    """Serve each request from *primary*, or from *fallback* while it is down.

    A single ``get_random_bytes()`` result always comes from one source;
    bytes from the two sources are never spliced together.

    Args:
        primary: Source asked first on every request.
        fallback: Source that answers requests the primary cannot.
    """

    def __init__(self, primary: EntropySource, fallback: EntropySource) -> None:
        self._primary = primary
        self._fallback = fallback
        self._last_source_used: str = primary.name
        self._degraded = False
        self._fallback_requests = 0

    @property
    def name(self) -> str:
        return f"{self._primary.name}+{self._fallback.name}"

    @property
    def is_available(self) -> bool:
        return self._primary.is_available or self._fallback.is_available

    @property
    def last_source_used(self) -> str:
        """Name of the source that answered the latest request."""
        return self._last_source_used

    @property
    def degraded(self) -> bool:
        """``True`` while the primary is failing and the fallback answers."""
        return self._degraded

    @property
    def fallback_requests(self) -> int:
        """How many requests the fallback has answered so far."""
        return self._fallback_requests

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the primary, or from the fallback if it fails.

        Raises:
            EntropyUnavailableError: If the fallback fails as well.
        """
        try:
            data = self._primary.get_random_bytes(n)
        except EntropyUnavailableError as exc:
            self._note_outage(exc)
            data = self._fallback.get_random_bytes(n)
            self._fallback_requests += 1
            self._last_source_used = self._fallback.name
            return data

        if self._degraded:
            logger.info(
                "Entropy source %r recovered after %d fallback requests",
                self._primary.name,
                self._fallback_requests,
            )
            self._degraded = False
        self._last_source_used = self._primary.name
        return data

    def _note_outage(self, exc: EntropyUnavailableError) -> None:
        if self._degraded:
            logger.debug("Entropy source %r still unavailable: %s", self._primary.name, exc)
            return
        self._degraded = True
        logger.warning(
            "Entropy source %r unavailable (%s); drawing from %r until it recovers",
            self._primary.name,
            exc,
            self._fallback.name,
        )

    def close(self) -> None:
        """Close the primary, then the fallback."""
        self._primary.close()
        self._fallback.close()

    def health_check(self) -> dict[str, Any]:
        status = super().health_check()
        status.update(
            primary=self._primary.health_check(),
            fallback=self._fallback.health_check(),
            last_source_used=self._last_source_used,
            degraded=self._degraded,
            fallback_requests=self._fallback_requests,
        )
        return status
