"""Configuration types for archive readers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ReaderConfig:
    """Archive reader configuration."""

    chunk_size: int = 8192
    encoding: str = "utf-8"
    errors: str = "surrogateescape"

    def __post_init__(self) -> None:
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")


DEFAULT_CONFIG = ReaderConfig()
