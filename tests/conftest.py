"""Shared pytest fixtures for csrng tests.

Provides reusable entropy sources, a counting test double, and the
``--long`` switch that enables the million-draw statistical checks.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from csrng.entropy.base import EntropySource
from csrng.entropy.system import SystemEntropySource
from csrng.generator import reset_default_generator


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--long",
        action="store_true",
        default=False,
        help="Run long statistical RNG tests.",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--long"):
        return
    skip_long = pytest.mark.skip(reason="long RNG test, run with --long to enable")
    for item in items:
        if "long" in item.keywords:
            item.add_marker(skip_long)


class CountingSource(EntropySource):
    """Test double: records every request made against a wrapped source."""

    def __init__(self, inner: EntropySource) -> None:
        self._inner = inner
        self.requests: list[int] = []

    @property
    def name(self) -> str:
        return f"counting({self._inner.name})"

    @property
    def is_available(self) -> bool:
        return self._inner.is_available

    def get_random_bytes(self, n: int) -> bytes:
        self.requests.append(n)
        return self._inner.get_random_bytes(n)

    def close(self) -> None:
        self._inner.close()


@pytest.fixture
def system_source() -> SystemEntropySource:
    """Return the production ``os.urandom()`` source."""
    return SystemEntropySource()


@pytest.fixture
def clean_default_generator(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Rebuild the process-wide generator from a clean CSRNG_* environment."""
    for var in (
        "CSRNG_ENTROPY_SOURCE_TYPE",
        "CSRNG_FALLBACK_MODE",
        "CSRNG_READER_PATH",
        "CSRNG_MAX_REJECTIONS",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_default_generator()
    yield
    reset_default_generator()


@pytest.fixture
def counting_source() -> Callable[[EntropySource], CountingSource]:
    """Return a factory wrapping any source in a CountingSource."""
    return CountingSource
