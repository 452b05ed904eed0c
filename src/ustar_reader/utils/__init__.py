"""Utility functions for the ustar archive reader."""

from .validator import is_valid_archive, validate_tar_archive

__all__ = ["is_valid_archive", "validate_tar_archive"]
