"""Configuration management for the textsplit application."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .exceptions import ValidationError


ENV_PREFIX = "TEXTSPLIT_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None


@dataclass
class Config:
    """Defaults for the CLI and where its results are written."""

    outputs_dir: Path = Path("outputs")
    default_chunk_size: int = 1000
    default_chunk_overlap: int = 200
    default_encoding_name: str = "gpt2"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> 'Config':
        """
        Build a config from TEXTSPLIT_* environment variables.

        Raises:
            ValidationError: If a numeric variable is not an integer
        """
        defaults = cls()
        return cls(
            outputs_dir=Path(os.getenv(ENV_PREFIX + "OUTPUTS_DIR", str(defaults.outputs_dir))),
            default_chunk_size=_env_int("CHUNK_SIZE", defaults.default_chunk_size),
            default_chunk_overlap=_env_int("CHUNK_OVERLAP", defaults.default_chunk_overlap),
            default_encoding_name=os.getenv(ENV_PREFIX + "ENCODING_NAME", defaults.default_encoding_name),
            log_level=os.getenv(ENV_PREFIX + "LOG_LEVEL", defaults.log_level),
        )

    def validate(self) -> None:
        """Check that the defaults would build a valid splitter."""
        if self.default_chunk_size <= 0:
            raise ValidationError("default_chunk_size must be positive")
        if self.default_chunk_overlap < 0:
            raise ValidationError("default_chunk_overlap must be non-negative")
        if self.default_chunk_overlap >= self.default_chunk_size:
            raise ValidationError(
                f"default_chunk_overlap ({self.default_chunk_overlap}) must be smaller "
                f"than default_chunk_size ({self.default_chunk_size})"
            )
        if not self.default_encoding_name:
            raise ValidationError("default_encoding_name cannot be empty")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValidationError(f"Invalid log_level: {self.log_level}. Must be one of: {', '.join(LOG_LEVELS)}")

    def ensure_directories(self) -> None:
        """Create the chunk output directory."""
        (self.outputs_dir / "chunks").mkdir(parents=True, exist_ok=True)


_config: Optional[Config] = None


def get_config() -> Config:
    """The process-wide config, loaded from the environment on first use."""
    global _config
    if _config is None:
        config = Config.from_env()
        config.validate()
        _config = config
    return _config


def set_config(config: Config) -> None:
    """Validate and install a config, e.g. from tests."""
    global _config
    config.validate()
    _config = config


def reset_config() -> None:
    """Forget the current config; the next get_config() reloads it."""
    global _config
    _config = None
