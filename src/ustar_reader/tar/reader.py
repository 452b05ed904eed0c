"""Async tar archive reader implementation."""

import logging
from typing import Any, AsyncIterator, List, Optional

import aiofiles

from ..core.types import DEFAULT_CONFIG, ReaderConfig
from ..exceptions import ArchiveClosedError, ArchiveOpenError, ShortReadError
from ..models import BLOCK_SIZE, TarEntry
from .archive import check_block, content_range
from .header import decode_header

logger = logging.getLogger(__name__)


class AsyncTarArchive:
    """Async reader for uncompressed ustar archives."""

    def __init__(self, path: str, config: Optional[ReaderConfig] = None) -> None:
        """Initialize tar reader.

        The file is opened on ``__aenter__`` or ``open()``.

        Args:
            path: Path to the tar file
            config: Reader configuration
        """
        self.identifier = str(path)
        self.config = config or DEFAULT_CONFIG
        self._file: Optional[Any] = None
        self._opened = False
        self.base = 0

    @classmethod
    async def open(
        cls, path: str, config: Optional[ReaderConfig] = None
    ) -> "AsyncTarArchive":
        """Create a reader and open its file.

        Raises:
            ArchiveOpenError: If the file cannot be opened
        """
        archive = cls(path, config)
        await archive._open()
        return archive

    async def _open(self) -> None:
        if self._opened:
            if self._file is None:
                raise ArchiveClosedError()
            return
        try:
            self._file = await aiofiles.open(self.identifier, "rb")
        except OSError as e:
            raise ArchiveOpenError(
                f"failed to open tar file - {self.identifier}: {e}"
            ) from e
        self._opened = True
        self.base = await self._file.tell()
        logger.debug("Opened tar archive %s", self.identifier)

    async def __aenter__(self) -> "AsyncTarArchive":
        """Enter async context manager.

        Raises:
            ArchiveOpenError: If the file cannot be opened
            ArchiveClosedError: If the reader was already closed
        """
        await self._open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()

    @property
    def closed(self) -> bool:
        return self._file is None

    async def close(self) -> None:
        """Close the tar file. Calling it again does nothing."""
        if self._file is not None:
            file, self._file = self._file, None
            await file.close()
            logger.debug("Closed tar archive %s", self.identifier)

    def _stream(self) -> Any:
        if self._file is None:
            raise ArchiveClosedError()
        return self._file

    async def iter_entries(self) -> AsyncIterator[TarEntry]:
        """Yield the archive entries in order.

        Raises:
            ArchiveClosedError: If the archive is not open
            ShortReadError: If the stream ends inside a block
            ChecksumError: If a header is corrupt
        """
        offset = 0
        while True:
            stream = self._stream()
            await stream.seek(self.base + offset)
            block = await stream.read(BLOCK_SIZE)
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
            offset += BLOCK_SIZE + entry.padded_size
            yield entry

    async def entries(self) -> List[TarEntry]:
        """Scan the whole archive.

        Returns:
            All entries in archive order

        Raises:
            ArchiveClosedError: If the archive is not open
            ShortReadError: If the stream ends inside a block
            ChecksumError: If a header is corrupt
        """
        self._stream()
        return [entry async for entry in self.iter_entries()]

    scan = entries

    async def read_entry(self, entry: TarEntry, size: int = -1) -> bytes:
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
        await stream.seek(position)
        data = await stream.read(count)
        if len(data) < count:
            raise ShortReadError(self.identifier, count, len(data))
        entry.read_position += count
        return data

    async def stream_entry(
        self, entry: TarEntry, chunk_size: Optional[int] = None
    ) -> AsyncIterator[bytes]:
        """Get entry content as an async stream.

        Args:
            entry: Entry produced by a scan of this archive
            chunk_size: Size of chunks to yield (defaults to config.chunk_size)

        Yields:
            Chunks of entry content
        """
        chunk_size = chunk_size or self.config.chunk_size
        while True:
            chunk = await self.read_entry(entry, chunk_size)
            if not chunk:
                break
            yield chunk
