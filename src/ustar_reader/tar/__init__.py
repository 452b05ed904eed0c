"""Tar archive reading."""

from .archive import TarArchive
from .header import (
    compute_checksum,
    decode_header,
    is_end_of_archive,
    parse_octal,
    verify_checksum,
)
from .reader import AsyncTarArchive

__all__ = [
    "TarArchive",
    "AsyncTarArchive",
    "compute_checksum",
    "decode_header",
    "is_end_of_archive",
    "parse_octal",
    "verify_checksum",
]
