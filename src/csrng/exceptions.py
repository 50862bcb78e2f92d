"""Exception hierarchy for csrng.

All exceptions derive from CSRNGError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
"""


class CSRNGError(Exception):
    """Base exception for all csrng errors."""


class InvalidArgumentError(CSRNGError, ValueError):
    """A caller passed an argument outside the operation's domain.

    Raised for bit widths above 64, non-positive range bounds, negative
    permutation or sample sizes. These are caller bugs and are never
    recovered from inside the library.
    """


class EntropyUnavailableError(CSRNGError):
    """The entropy source could not supply the requested bytes.

    Raised on short reads, exhausted buffers and I/O errors. The library
    never retries; the caller decides whether to try again with another
    source.
    """


class RejectionLimitError(CSRNGError):
    """The rejection sampling loop exceeded its configured draw cap.

    Only raised when ``max_rejections`` is positive. With a healthy source
    the probability of hitting even a small cap is negligible, so this
    usually points at a stuck or degenerate entropy source.
    """


class ConfigValidationError(CSRNGError):
    """Configuration field validation failed.

    Raised when the fallback mode or entropy source name is unknown.
    """
