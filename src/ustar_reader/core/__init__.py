"""Core configuration types."""

from .types import ReaderConfig

__all__ = ["ReaderConfig"]
