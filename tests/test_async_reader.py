"""Tests for the async archive reader."""

import pytest

from tests.helpers import make_archive
from ustar_reader import (
    ArchiveClosedError,
    ArchiveOpenError,
    AsyncTarArchive,
    ChecksumError,
    ReaderConfig,
    ShortReadError,
)


@pytest.mark.asyncio
async def test_async_single_small_file(small_archive):
    """Test scanning a single-file archive."""
    async with AsyncTarArchive(str(small_archive)) as archive:
        entries = await archive.entries()

    assert [(e.path, e.size, e.header_offset) for e in entries] == [("a.txt", 5, 0)]


@pytest.mark.asyncio
async def test_async_iter_entries(tmp_path):
    """Test offsets of lazily iterated entries."""
    tar_path = tmp_path / "two.tar"
    tar_path.write_bytes(make_archive(("one", b"1" * 1000), ("two", b"2")))

    async with AsyncTarArchive(str(tar_path)) as archive:
        offsets = [entry.header_offset async for entry in archive.iter_entries()]

    assert offsets == [0, 1536]


@pytest.mark.asyncio
async def test_async_open_classmethod(small_archive):
    """Test explicit open and idempotent close."""
    archive = await AsyncTarArchive.open(str(small_archive))
    assert not archive.closed
    assert len(await archive.scan()) == 1

    await archive.close()
    await archive.close()
    assert archive.closed


@pytest.mark.asyncio
async def test_async_open_missing_file(tmp_path):
    """Test opening a file that does not exist."""
    with pytest.raises(ArchiveOpenError, match="nope.tar"):
        await AsyncTarArchive.open(str(tmp_path / "nope.tar"))


@pytest.mark.asyncio
async def test_async_closed_archive(small_archive):
    """Test scanning after close."""
    archive = await AsyncTarArchive.open(str(small_archive))
    await archive.close()

    with pytest.raises(ArchiveClosedError):
        await archive.entries()


@pytest.mark.asyncio
async def test_async_not_opened(small_archive):
    """Test scanning before the file is opened."""
    archive = AsyncTarArchive(str(small_archive))
    with pytest.raises(ArchiveClosedError):
        await archive.entries()


@pytest.mark.asyncio
async def test_async_short_read(tmp_path):
    """Test truncated archive."""
    tar_path = tmp_path / "short.tar"
    tar_path.write_bytes(b"x" * 300)

    async with AsyncTarArchive(str(tar_path)) as archive:
        with pytest.raises(ShortReadError) as exc_info:
            await archive.entries()

    assert exc_info.value.actual == 300
    assert str(tar_path) in str(exc_info.value)


@pytest.mark.asyncio
async def test_async_checksum_failure(tmp_path):
    """Test corrupt header."""
    data = bytearray(make_archive(("a", b"1")))
    data[0] = ord("b")
    tar_path = tmp_path / "corrupt.tar"
    tar_path.write_bytes(bytes(data))

    async with AsyncTarArchive(str(tar_path)) as archive:
        with pytest.raises(ChecksumError):
            await archive.entries()


@pytest.mark.asyncio
async def test_async_read_and_stream_entry(tmp_path):
    """Test reading entry content in chunks."""
    content = bytes(range(256)) * 5
    tar_path = tmp_path / "content.tar"
    tar_path.write_bytes(make_archive(("blob", content), ("tail", b"end")))

    config = ReaderConfig(chunk_size=100)
    async with AsyncTarArchive(str(tar_path), config) as archive:
        blob, tail = await archive.entries()

        assert await blob.read(10) == content[:10]
        chunks = [chunk async for chunk in archive.stream_entry(blob)]
        assert b"".join(chunks) == content[10:]
        assert max(len(chunk) for chunk in chunks) == 100
        assert await archive.read_entry(tail) == b"end"

    with pytest.raises(ArchiveClosedError):
        tail.read()


@pytest.mark.asyncio
async def test_async_reenter_after_close(small_archive):
    """Test that a closed reader cannot be entered again."""
    archive = AsyncTarArchive(str(small_archive))
    async with archive:
        assert len(await archive.entries()) == 1
    assert archive.closed

    with pytest.raises(ArchiveClosedError):
        async with archive:
            pass


@pytest.mark.asyncio
async def test_async_read_entry_from_other_archive(small_archive):
    """Test reading an entry through a reader that did not produce it."""
    async with AsyncTarArchive(str(small_archive)) as one:
        async with AsyncTarArchive(str(small_archive)) as two:
            (entry,) = await one.entries()
            with pytest.raises(ValueError, match="does not belong"):
                await two.read_entry(entry)
            assert await one.read_entry(entry) == b"hello"
