"""Decoding of ustar header blocks."""

from typing import Any, Optional

from ..core.types import DEFAULT_CONFIG, ReaderConfig
from ..models import (
    AREGTYPE,
    BLOCK_SIZE,
    DIRTYPE,
    LNKTYPE,
    REGTYPE,
    SYMTYPE,
    Directory,
    EntryKind,
    HardLink,
    Other,
    Regular,
    SymbolicLink,
    TarEntry,
)

# Field ranges within a header block (ustar layout)
NAME = slice(0, 100)
MODE = slice(100, 108)
UID = slice(108, 116)
GID = slice(116, 124)
SIZE = slice(124, 136)
MTIME = slice(136, 148)
CHKSUM = slice(148, 156)
TYPEFLAG = 156
LINKNAME = slice(157, 257)
UNAME = slice(265, 297)
GNAME = slice(297, 329)

ZERO_BLOCK = bytes(BLOCK_SIZE)

_OCTAL_DIGITS = b"01234567"


def parse_octal(field: bytes) -> int:
    """Parse an octal number, ignoring leading and trailing nonsense.

    Leading bytes that are not octal digits are skipped, then digits are
    accumulated up to the first non-digit or the end of the field.

    Args:
        field: Raw fixed-width header field

    Returns:
        Decoded value, 0 if the field holds no digits
    """
    i = 0
    n = len(field)
    while i < n and field[i] not in _OCTAL_DIGITS:
        i += 1
    value = 0
    while i < n and field[i] in _OCTAL_DIGITS:
        value = value * 8 + (field[i] - 0x30)
        i += 1
    return value


def compute_checksum(block: bytes) -> int:
    """Sum the unsigned header bytes, counting the checksum field as spaces."""
    return (
        sum(block[: CHKSUM.start])
        + 0x20 * (CHKSUM.stop - CHKSUM.start)
        + sum(block[CHKSUM.stop : BLOCK_SIZE])
    )


def verify_checksum(block: bytes) -> bool:
    """Check the stored checksum of a header block against its contents."""
    return compute_checksum(block) == parse_octal(block[CHKSUM])


def is_end_of_archive(block: bytes) -> bool:
    """Return True if this is 512 zero bytes."""
    return block == ZERO_BLOCK


def _decode_string(field: bytes, config: ReaderConfig) -> str:
    end = field.find(b"\x00")
    if end != -1:
        field = field[:end]
    return field.decode(config.encoding, config.errors)


def decode_kind(type_flag: str, linkname: str) -> EntryKind:
    """Map a type flag to its entry kind."""
    if type_flag in (REGTYPE, AREGTYPE):
        return Regular(type_flag)
    if type_flag == LNKTYPE:
        return HardLink(linkname)
    if type_flag == SYMTYPE:
        return SymbolicLink(linkname)
    if type_flag == DIRTYPE:
        return Directory()
    return Other(type_flag)


def decode_header(
    block: bytes,
    offset: int,
    archive: Optional[Any] = None,
    config: Optional[ReaderConfig] = None,
) -> TarEntry:
    """Decode a validated header block into an entry.

    Args:
        block: 512-byte header block that passed checksum validation
        offset: Archive offset at which the header block starts
        archive: Archive to back-reference from the entry, if any
        config: Reader configuration (string decoding)

    Returns:
        Decoded TarEntry
    """
    config = config or DEFAULT_CONFIG

    path = _decode_string(block[NAME], config)
    type_flag = chr(block[TYPEFLAG])
    linkname = ""
    if type_flag in (LNKTYPE, SYMTYPE):
        linkname = _decode_string(block[LINKNAME], config)

    entry = TarEntry(
        path=path,
        kind=decode_kind(type_flag, linkname),
        mode=parse_octal(block[MODE]),
        size=parse_octal(block[SIZE]),
        header_offset=offset,
        uid=parse_octal(block[UID]),
        gid=parse_octal(block[GID]),
        mtime=parse_octal(block[MTIME]),
        uname=_decode_string(block[UNAME], config),
        gname=_decode_string(block[GNAME], config),
    )
    if archive is not None:
        entry.bind(archive)
    return entry
