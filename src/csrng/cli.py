"""Command-line entry points that print random draws.

Installed as console scripts::

    csrng-intn --range 6 --count 10     # ten dice rolls (0..5)
    csrng-float64 --count 3             # three floats in [0, 1)
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING

from csrng.config import CSRNGConfig
from csrng.exceptions import (
    ConfigValidationError,
    CSRNGError,
    EntropyUnavailableError,
    InvalidArgumentError,
)
from csrng.generator import SecureRandom, build_entropy_source

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = logging.getLogger("csrng")


def _base_parser(description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--count",
        type=int,
        default=1,
        help="How many values to draw (default: 1).",
    )
    parser.add_argument(
        "--source",
        type=str,
        default=None,
        help="Registered entropy source name (default: CSRNG_ENTROPY_SOURCE_TYPE or 'system').",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def _run(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    draw: Callable[[SecureRandom], object],
) -> int:
    """Print ``args.count`` results of *draw*, one per line."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    if args.count < 0:
        parser.error(f"--count must be non-negative, got {args.count}")

    overrides = {"entropy_source_type": args.source} if args.source else {}
    try:
        config = CSRNGConfig(**overrides)
        generator = SecureRandom(build_entropy_source(config), config.max_rejections)
    except ConfigValidationError as exc:
        parser.error(str(exc))
    except EntropyUnavailableError as exc:
        logger.error("Cannot open entropy source: %s", exc)
        return 1

    with generator:
        try:
            for _ in range(args.count):
                print(draw(generator))
        except InvalidArgumentError as exc:
            parser.error(str(exc))
        except CSRNGError as exc:
            logger.error("Drawing failed: %s", exc)
            return 1
    return 0


def intn_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``csrng-intn``."""
    parser = _base_parser("Print uniform random integers in [0, RANGE).")
    parser.add_argument(
        "--range",
        type=int,
        default=256,
        dest="range_",
        help="Exclusive upper bound; values are drawn from 0 to RANGE-1 (default: 256).",
    )
    args = parser.parse_args(argv)
    return _run(parser, args, lambda gen: gen.intn(args.range_))


def float64_main(argv: Sequence[str] | None = None) -> int:
    """Entry point for ``csrng-float64``."""
    parser = _base_parser("Print uniform random floats in [0.0, 1.0).")
    args = parser.parse_args(argv)
    return _run(parser, args, lambda gen: gen.float64())


if __name__ == "__main__":
    sys.exit(intn_main())
