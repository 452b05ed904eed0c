"""Archive validation utilities."""

from pathlib import Path
from typing import Union

from ..exceptions import (
    ArchiveOpenError,
    ChecksumError,
    ShortReadError,
    ValidationError,
)
from ..tar.archive import TarArchive


def is_path_exists(path: Path) -> bool:
    """Check if file path exists."""
    return path.exists()


def is_valid_archive(path: Union[str, Path]) -> bool:
    """Check if every header of the archive reads and validates."""
    try:
        with TarArchive.open(str(path)) as archive:
            archive.entries()
    except (ArchiveOpenError, ShortReadError, ChecksumError):
        return False
    return True


def validate_tar_archive(tar_path: Union[str, Path]) -> bool:
    """Validate that a path holds a readable ustar archive.

    Args:
        tar_path: Path to the archive

    Returns:
        True if the archive scans cleanly, False otherwise

    Raises:
        ValidationError: If the path does not exist

    Examples:
        from pathlib import Path

        if validate_tar_archive(Path("backup.tar")):
            print("archive is intact")
    """
    tar_path = Path(tar_path)
    if not is_path_exists(tar_path):
        raise ValidationError(f"Tar file does not exist: {tar_path}")
    return is_valid_archive(tar_path)
