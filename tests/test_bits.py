"""Tests for csrng.bits: the bit extractor and min_bytes.

Covers:
- Little-endian assembly reading the minimum number of bytes
- Masking of unused high bits, including across byte boundaries and n=64
- Zero-width requests consuming no entropy
- Argument validation (n > 64, negative n, non-integer n)
- numpy integer scalars accepted as widths
- Short reads and misbehaving sources surfacing as EntropyUnavailableError
- min_bytes at every byte boundary
"""

from __future__ import annotations

import numpy as np
import pytest

from csrng.bits import MAX_BITS, UINT64_MAX, min_bytes, uint64_bits_from
from csrng.entropy.base import EntropySource
from csrng.entropy.reader import FixedBytesSource
from csrng.entropy.system import SystemEntropySource
from csrng.exceptions import EntropyUnavailableError, InvalidArgumentError


class _ShortSource(EntropySource):
    """Test double: returns one byte fewer than requested."""

    @property
    def name(self) -> str:
        return "short"

    @property
    def is_available(self) -> bool:
        return True

    def get_random_bytes(self, n: int) -> bytes:
        return b"\x00" * max(n - 1, 0)

    def close(self) -> None:
        pass


class TestUint64BitsRead:
    """The extractor reads exactly ceil(n/8) bytes, little-endian.

    Each source holds exactly the bytes needed; reading one more would
    raise EntropyUnavailableError.
    """

    @pytest.mark.parametrize(
        ("source", "bits", "value"),
        [
            (b"", 0, 0),
            (b"\x12", 8, 0x12),
            (b"\x12\x34", 16, 0x3412),
            (b"\x12\x34\x56", 24, 0x563412),
            (b"\x12\x34\x56\x78", 32, 0x78563412),
            (b"\x12\x34\x56\x78\x9a", 40, 0x9A78563412),
            (b"\x12\x34\x56\x78\x9a\xbc", 48, 0xBC9A78563412),
            (b"\x12\x34\x56\x78\x9a\xbc\xde", 56, 0xDEBC9A78563412),
            (b"\x12\x34\x56\x78\x9a\xbc\xde\xf0", 64, 0xF0DEBC9A78563412),
        ],
    )
    def test_little_endian_assembly(self, source: bytes, bits: int, value: int) -> None:
        src = FixedBytesSource(source)
        assert uint64_bits_from(src, bits) == value
        assert src.remaining == 0

    @pytest.mark.parametrize(("bits", "expected_bytes"), [(1, 1), (7, 1), (9, 2), (53, 7), (57, 8)])
    def test_partial_byte_widths_round_up(self, bits: int, expected_bytes: int) -> None:
        src = FixedBytesSource(b"\xff" * 8)
        uint64_bits_from(src, bits)
        assert src.bytes_consumed == expected_bytes

    def test_zero_bits_reads_nothing(self) -> None:
        src = FixedBytesSource(b"")
        assert uint64_bits_from(src, 0) == 0
        assert src.bytes_consumed == 0


class TestUint64BitsMask:
    """Bits at positions >= n are always zero."""

    @pytest.mark.parametrize(
        ("bits", "value"),
        [
            (0, 0x0),
            (1, 0x1),
            (2, 0x3),
            (3, 0x7),
            (4, 0xF),
            (5, 0x1F),
            (6, 0x3F),
            (7, 0x7F),
            (8, 0xFF),
            (9, 0x1FF),
            (60, 0x0FFFFFFFFFFFFFFF),
            (61, 0x1FFFFFFFFFFFFFFF),
            (62, 0x3FFFFFFFFFFFFFFF),
            (63, 0x7FFFFFFFFFFFFFFF),
            (64, 0xFFFFFFFFFFFFFFFF),
        ],
    )
    def test_all_ones_source(self, bits: int, value: int) -> None:
        src = FixedBytesSource(b"\xff" * 8)
        assert uint64_bits_from(src, bits) == value

    def test_high_bits_zero_for_every_width(self, system_source: SystemEntropySource) -> None:
        for n in range(MAX_BITS + 1):
            for _ in range(20):
                r = uint64_bits_from(system_source, n)
                assert r >> n == 0
                assert 0 <= r <= UINT64_MAX


class TestUint64BitsErrors:
    """Precondition violations and source failures."""

    @pytest.mark.parametrize("bits", [65, 128, -1])
    def test_invalid_width_raises(self, bits: int) -> None:
        with pytest.raises(InvalidArgumentError):
            uint64_bits_from(FixedBytesSource(b"\x00" * 16), bits)

    def test_invalid_width_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            uint64_bits_from(FixedBytesSource(b""), 65)

    def test_empty_source_raises(self) -> None:
        with pytest.raises(EntropyUnavailableError):
            uint64_bits_from(FixedBytesSource(b""), 8)

    def test_short_buffer_raises(self) -> None:
        with pytest.raises(EntropyUnavailableError):
            uint64_bits_from(FixedBytesSource(b"\x01\x02"), 24)

    def test_source_returning_too_few_bytes_raises(self) -> None:
        with pytest.raises(EntropyUnavailableError, match="returned 3 bytes, expected 4"):
            uint64_bits_from(_ShortSource(), 32)


class TestMinBytes:
    """min_bytes returns ceil(bit_length / 8), and 0 for 0."""

    @pytest.mark.parametrize(
        ("arg", "expected"),
        [
            (0, 0),
            (0x1, 1),
            (0xFF, 1),
            (0x100, 2),
            (0xFFFF, 2),
            (0x10000, 3),
            (0xFFFFFF, 3),
            (0x1000000, 4),
            (0xFFFFFFFF, 4),
            (0x100000000, 5),
            (0xFFFFFFFFFF, 5),
            (0x10000000000, 6),
            (0xFFFFFFFFFFFF, 6),
            (0x1000000000000, 7),
            (0xFFFFFFFFFFFFFF, 7),
            (0x100000000000000, 8),
            (0x7FFFFFFFFFFFFFFF, 8),
            (0xFFFFFFFFFFFFFFFF, 8),
        ],
    )
    def test_boundaries(self, arg: int, expected: int) -> None:
        assert min_bytes(arg) == expected

    @pytest.mark.parametrize("arg", [-1, 1 << 64])
    def test_out_of_range_raises(self, arg: int) -> None:
        with pytest.raises(InvalidArgumentError):
            min_bytes(arg)

    def test_numpy_integer_accepted(self) -> None:
        assert min_bytes(np.uint64(0xFFFF)) == 2


class TestUint64BitsIntegerTypes:
    """Any integer implementing ``__index__`` is a valid width."""

    def test_numpy_width(self) -> None:
        assert uint64_bits_from(FixedBytesSource(b"\x12\x34"), np.int64(16)) == 0x3412

    def test_numpy_width_out_of_range_raises(self) -> None:
        with pytest.raises(InvalidArgumentError):
            uint64_bits_from(FixedBytesSource(b"\x00" * 9), np.int64(65))

    @pytest.mark.parametrize("bits", [8.0, "8", True, None])
    def test_non_integer_width_raises(self, bits: object) -> None:
        with pytest.raises(InvalidArgumentError, match="must be an int"):
            uint64_bits_from(FixedBytesSource(b"\x00"), bits)  # type: ignore[arg-type]
