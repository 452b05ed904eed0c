"""Streaming reader for ustar tar archives."""

import logging
from typing import Any, BinaryIO, Iterator, List, Optional

from ..core.types import DEFAULT_CONFIG, ReaderConfig
from ..exceptions import (
    ArchiveClosedError,
    ArchiveOpenError,
    ChecksumError,
    ShortReadError,
)
from ..models import BLOCK_SIZE, TarEntry
from .header import decode_header, is_end_of_archive, verify_checksum

logger = logging.getLogger(__name__)


def check_block(block: bytes, offset: int, identifier: str) -> bool:
    """Validate one block read at a header position.

    Args:
        block: Bytes returned by the read
        offset: Archive offset of the block
        identifier: Archive name for error messages

    Returns:
        True if the block marks the end of the archive

    Raises:
        ShortReadError: If the block is incomplete
        ChecksumError: If the header checksum does not match
    """
    if len(block) < BLOCK_SIZE:
        raise ShortReadError(identifier, BLOCK_SIZE, len(block))
    if is_end_of_archive(block):
        logger.debug("End of archive %s at offset %d", identifier, offset)
        return True
    if not verify_checksum(block):
        raise ChecksumError(offset)
    return False


def content_range(archive: Any, entry: TarEntry, size: int) -> tuple[int, int]:
    """Return (stream position, byte count) for the next content read.

    Raises:
        ValueError: If the entry was not read from this archive
    """
    if not entry.belongs_to(archive):
        raise ValueError(
            f"Entry {entry.path} does not belong to {archive.identifier}"
        )
    remaining = max(entry.size - entry.read_position, 0)
    if size < 0 or size > remaining:
        size = remaining
    return archive.base + entry.data_offset + entry.read_position, size


class TarArchive:
    """Reader for an uncompressed ustar archive on a seekable stream."""

    def __init__(
        self,
        fileobj: BinaryIO,
        identifier: str,
        config: Optional[ReaderConfig] = None,
    ) -> None:
        """Wrap an open stream.

        Args:
            fileobj: Seekable binary stream positioned at the start of the
                archive, owned by the archive from now on
            identifier: Name of the stream's origin, used in error messages
            config: Reader configuration
        """
        self._fileobj: Optional[BinaryIO] = fileobj
        # Archive offsets are relative to where the stream starts
        self.base = fileobj.tell()
        self.identifier = str(identifier)
        self.config = config or DEFAULT_CONFIG

    @classmethod
    def open(cls, path: str, config: Optional[ReaderConfig] = None) -> "TarArchive":
        """Open a tar archive from the filesystem.

        Raises:
            ArchiveOpenError: If the file cannot be opened
        """
        try:
            fileobj = open(path, "rb")
        except OSError as e:
            raise ArchiveOpenError(f"failed to open tar file - {path}: {e}") from e
        logger.debug("Opened tar archive %s", path)
        return cls(fileobj, str(path), config)

    def __enter__(self) -> "TarArchive":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __del__(self) -> None:
        # __init__ may not have run to completion
        if getattr(self, "_fileobj", None) is not None:
            self.close()

    def __iter__(self) -> Iterator[TarEntry]:
        return self.iter_entries()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"<TarArchive {self.identifier!r} {state}>"

    @property
    def closed(self) -> bool:
        return self._fileobj is None

    def close(self) -> None:
        """Close the archive stream. Calling it again does nothing."""
        if self._fileobj is not None:
            fileobj, self._fileobj = self._fileobj, None
            fileobj.close()
            logger.debug("Closed tar archive %s", self.identifier)

    def _stream(self) -> BinaryIO:
        if self._fileobj is None:
            raise ArchiveClosedError()
        return self._fileobj

    def iter_entries(self) -> Iterator[TarEntry]:
        """Lazily yield the archive entries in order.

        Errors are raised when the offending block is reached, after the
        entries before it have been yielded.

        Raises:
            ArchiveClosedError: If the archive is closed
            ShortReadError: If the stream ends inside a block
            ChecksumError: If a header is corrupt
        """
        self._stream()
        return self._scan()

    def _scan(self) -> Iterator[TarEntry]:
        offset = 0
        while True:
            stream = self._stream()
            stream.seek(self.base + offset)
            block = stream.read(BLOCK_SIZE)
            if check_block(block, offset, self.identifier):
                return

            entry = decode_header(block, offset, self, self.config)
            logger.debug(
                "Entry %s (type %r, %d bytes) at offset %d",
                entry.path,
                entry.type_flag,
                entry.size,
                offset,
            )
            # Header block plus block-aligned content
            offset += BLOCK_SIZE + entry.padded_size
            yield entry

    def entries(self) -> List[TarEntry]:
        """Scan the whole archive.

        Returns:
            All entries in archive order; nothing is returned if any block
            fails to read or validate.

        Raises:
            ArchiveClosedError: If the archive is closed
            ShortReadError: If the stream ends inside a block
            ChecksumError: If a header is corrupt
        """
        return list(self.iter_entries())

    scan = entries

    def read_entry(self, entry: TarEntry, size: int = -1) -> bytes:
        """Read content of an entry from its read position.

        Args:
            entry: Entry produced by a scan of this archive
            size: Maximum number of bytes, negative for the rest

        Returns:
            Content bytes, empty once the entry is exhausted

        Raises:
            ArchiveClosedError: If the archive is closed
            ShortReadError: If the stream ends before the declared size
            ValueError: If the entry comes from another archive
        """
        stream = self._stream()
        position, count = content_range(self, entry, size)
        if count == 0:
            return b""
        stream.seek(position)
        data = stream.read(count)
        if len(data) < count:
            raise ShortReadError(self.identifier, count, len(data))
        entry.read_position += count
        return data
