"""Entropy sources backed by a binary stream.

``ReaderEntropySource`` turns any readable binary file object (a device
such as ``/dev/urandom``, a pipe from a hardware RNG daemon, a socket
file) into an entropy source. ``FixedBytesSource`` is the in-memory
variant used to make draws deterministic in tests.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from csrng.entropy.base import EntropySource
from csrng.entropy.registry import register_entropy_source
from csrng.exceptions import EntropyUnavailableError

logger = logging.getLogger("csrng")

_DEFAULT_PATH = "/dev/urandom"


@register_entropy_source("reader")
class ReaderEntropySource(EntropySource):
    """Read entropy from a binary stream with read-full semantics.

    ``get_random_bytes(n)`` keeps reading until *n* bytes have arrived.
    End of stream before that point is a short read and raises
    :class:`~csrng.exceptions.EntropyUnavailableError`; bytes consumed by
    the failed call are lost.

    Args:
        stream: An already-open binary stream. The caller keeps ownership
            and is responsible for closing it.
        path: File to open in ``rb`` mode when *stream* is not given. The
            source owns that handle and closes it in :meth:`close`.
    """

    def __init__(self, stream: BinaryIO | None = None, path: str = _DEFAULT_PATH) -> None:
        if stream is None:
            try:
                stream = open(path, "rb", buffering=0)
            except OSError as exc:
                raise EntropyUnavailableError(f"Cannot open entropy file {path!r}: {exc}") from exc
            self._owns_stream = True
            self._label = path
        else:
            self._owns_stream = False
            self._label = getattr(stream, "name", type(stream).__name__)
        self._stream = stream

    @property
    def name(self) -> str:
        """Return ``'reader'``."""
        return "reader"

    @property
    def is_available(self) -> bool:
        """``True`` until the underlying stream is closed."""
        return not self._stream.closed

    def get_random_bytes(self, n: int) -> bytes:
        """Read exactly *n* bytes from the stream.

        Raises:
            EntropyUnavailableError: On end of stream, a closed stream or an
                I/O error.
        """
        chunks: list[bytes] = []
        remaining = n
        try:
            while remaining > 0:
                chunk = self._stream.read(remaining)
                if not chunk:
                    raise EntropyUnavailableError(
                        f"Short read from {self._label!r}: wanted {n} bytes, got {n - remaining}"
                    )
                chunks.append(chunk)
                remaining -= len(chunk)
        except (OSError, ValueError) as exc:
            # ValueError: read on a closed file object.
            raise EntropyUnavailableError(f"Read from {self._label!r} failed: {exc}") from exc
        return b"".join(chunks)

    def close(self) -> None:
        """Close the stream if this source opened it."""
        if self._owns_stream and not self._stream.closed:
            logger.debug("Closing entropy file %r", self._label)
            self._stream.close()


class FixedBytesSource(ReaderEntropySource):
    """A finite, predetermined byte sequence, consumed front to back.

    Every draw is reproducible given the same bytes, which makes this the
    source of choice for tests that pin exact outputs. Once the buffer is
    exhausted every further request raises ``EntropyUnavailableError``.

    Not registered by name: a fixed buffer is never a valid default source,
    so it can only be passed explicitly.

    Args:
        data: The bytes to hand out.
    """

    def __init__(self, data: bytes = b"") -> None:
        self._size = len(data)
        self._consumed_at_close = 0
        super().__init__(stream=io.BytesIO(data))

    @property
    def name(self) -> str:
        """Return ``'fixed'``."""
        return "fixed"

    @property
    def bytes_consumed(self) -> int:
        """Number of bytes handed out (or lost to short reads) so far.

        Still readable after :meth:`close`.
        """
        if self._stream.closed:
            return self._consumed_at_close
        return self._stream.tell()

    @property
    def remaining(self) -> int:
        """Number of bytes never handed out."""
        return self._size - self.bytes_consumed

    def close(self) -> None:
        """Discard the buffer; later reads raise ``EntropyUnavailableError``."""
        if not self._stream.closed:
            self._consumed_at_close = self._stream.tell()
            self._stream.close()
