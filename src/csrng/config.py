"""Configuration system for csrng.

Uses pydantic-settings for declarative, layered configuration:
init kwargs -> environment variables (CSRNG_*) -> .env file -> field defaults.

Only the process-wide default generator reads this configuration; code
that constructs a :class:`~csrng.generator.SecureRandom` with an explicit
source is unaffected by it.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from csrng.entropy import EntropySourceRegistry
from csrng.exceptions import ConfigValidationError

FALLBACK_MODES: frozenset[str] = frozenset({"error", "system"})


class CSRNGConfig(BaseSettings):
    """Configuration for the default csrng generator.

    Resolution order: init kwargs -> env vars (CSRNG_*) -> .env file -> defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="CSRNG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    entropy_source_type: str = Field(
        default="system",
        description="Registered name of the default entropy source",
    )
    fallback_mode: str = Field(
        default="error",
        description="What to do when the source is unavailable: 'error' or 'system'",
    )
    reader_path: str = Field(
        default="/dev/urandom",
        description="File read by the 'reader' entropy source",
    )
    max_rejections: int = Field(
        default=0,
        description="Consecutive rejected draws before giving up (<=0 never gives up)",
    )


def validate_config(config: CSRNGConfig) -> None:
    """Check fields that pydantic cannot validate on its own.

    Args:
        config: The configuration to check.

    Raises:
        ConfigValidationError: If the fallback mode or entropy source name
            is unknown.
    """
    if config.fallback_mode not in FALLBACK_MODES:
        allowed = ", ".join(sorted(FALLBACK_MODES))
        raise ConfigValidationError(
            f"Unknown fallback_mode {config.fallback_mode!r} (expected one of: {allowed})"
        )
    try:
        EntropySourceRegistry.get(config.entropy_source_type)
    except KeyError as exc:
        raise ConfigValidationError(str(exc.args[0])) from exc
