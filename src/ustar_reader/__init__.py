"""ustar reader - streaming metadata scanner for POSIX ustar tar archives."""

__version__ = "0.1.0"

from .core.types import ReaderConfig
from .exceptions import (
    ArchiveClosedError,
    ArchiveOpenError,
    ChecksumError,
    ShortReadError,
    TarArchiveError,
    ValidationError,
)
from .models import (
    Directory,
    EntryKind,
    HardLink,
    Other,
    Regular,
    SymbolicLink,
    TarEntry,
    padded_size,
)
from .tar.archive import TarArchive
from .tar.header import (
    compute_checksum,
    decode_header,
    is_end_of_archive,
    parse_octal,
    verify_checksum,
)
from .tar.reader import AsyncTarArchive
from .utils.validator import is_valid_archive, validate_tar_archive


def open_archive(path: str, config: ReaderConfig | None = None) -> TarArchive:
    """Open a tar archive for scanning.

    Args:
        path: Path to the archive
        config: Optional reader configuration

    Returns:
        TarArchive: open archive handle, usable as a context manager

    Raises:
        ArchiveOpenError: If the file cannot be opened

    Examples:
        with open_archive("backup.tar") as archive:
            for entry in archive.entries():
                print(entry.path, entry.size)
    """
    return TarArchive.open(path, config)


__all__ = [
    "open_archive",
    "TarArchive",
    "AsyncTarArchive",
    "TarEntry",
    "EntryKind",
    "Regular",
    "HardLink",
    "SymbolicLink",
    "Directory",
    "Other",
    "ReaderConfig",
    "padded_size",
    "parse_octal",
    "compute_checksum",
    "verify_checksum",
    "is_end_of_archive",
    "decode_header",
    "is_valid_archive",
    "validate_tar_archive",
    "TarArchiveError",
    "ArchiveOpenError",
    "ArchiveClosedError",
    "ShortReadError",
    "ChecksumError",
    "ValidationError",
]
