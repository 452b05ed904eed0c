"""Test configuration and fixtures."""

import io
import tarfile

import pytest

from tests.helpers import make_archive


@pytest.fixture
def small_archive_bytes():
    """One regular file 'a.txt' holding 5 bytes."""
    return make_archive(("a.txt", b"hello"))


@pytest.fixture
def small_archive(tmp_path, small_archive_bytes):
    """Path to an archive holding a single small file."""
    tar_path = tmp_path / "small.tar"
    tar_path.write_bytes(small_archive_bytes)
    return tar_path


@pytest.fixture
def stdlib_archive(tmp_path):
    """Archive written by the standard library tarfile module."""
    tar_path = tmp_path / "stdlib.tar"
    with tarfile.open(tar_path, "w", format=tarfile.USTAR_FORMAT) as tar:
        dir_info = tarfile.TarInfo("docs")
        dir_info.type = tarfile.DIRTYPE
        dir_info.mode = 0o755
        tar.addfile(dir_info)

        content = b"x" * 1000
        file_info = tarfile.TarInfo("docs/readme.md")
        file_info.size = len(content)
        file_info.mode = 0o600
        tar.addfile(file_info, io.BytesIO(content))

        link_info = tarfile.TarInfo("latest")
        link_info.type = tarfile.SYMTYPE
        link_info.linkname = "docs/readme.md"
        tar.addfile(link_info)

        hard_info = tarfile.TarInfo("copy.md")
        hard_info.type = tarfile.LNKTYPE
        hard_info.linkname = "docs/readme.md"
        tar.addfile(hard_info)

        fifo_info = tarfile.TarInfo("pipe")
        fifo_info.type = tarfile.FIFOTYPE
        tar.addfile(fifo_info)
    return tar_path

