"""Data models for tar archive entries."""

import weakref
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from .exceptions import ArchiveClosedError

BLOCK_SIZE = 512

REGTYPE = "0"
AREGTYPE = "\x00"  # pre-POSIX regular file
LNKTYPE = "1"
SYMTYPE = "2"
CHRTYPE = "3"
BLKTYPE = "4"
DIRTYPE = "5"
FIFOTYPE = "6"
CONTTYPE = "7"


@dataclass(frozen=True)
class Regular:
    """Regular file."""

    type_flag: str = REGTYPE


@dataclass(frozen=True)
class HardLink:
    """Hard link to another archive member."""

    target: str
    type_flag: str = LNKTYPE


@dataclass(frozen=True)
class SymbolicLink:
    """Symbolic link."""

    target: str
    type_flag: str = SYMTYPE


@dataclass(frozen=True)
class Directory:
    """Directory."""

    type_flag: str = DIRTYPE


@dataclass(frozen=True)
class Other:
    """Any other type flag (devices, fifos, extended headers...)."""

    type_flag: str


EntryKind = Union[Regular, HardLink, SymbolicLink, Directory, Other]


def padded_size(size: int) -> int:
    """Round a content size up to a whole number of blocks."""
    if size % BLOCK_SIZE == 0:
        return size
    return (size // BLOCK_SIZE + 1) * BLOCK_SIZE


@dataclass(eq=False)
class TarEntry:
    """Metadata of one archive member, as found by a scan."""

    path: str
    kind: EntryKind
    mode: int
    size: int
    header_offset: int  # Offset of the header block within the archive
    uid: int = 0
    gid: int = 0
    mtime: int = 0
    uname: str = ""
    gname: str = ""
    read_position: int = 0
    _archive_ref: Optional[weakref.ReferenceType] = field(
        default=None, repr=False, compare=False
    )

    @property
    def type_flag(self) -> str:
        return self.kind.type_flag

    @property
    def link_target(self) -> Optional[str]:
        if isinstance(self.kind, (HardLink, SymbolicLink)):
            return self.kind.target
        return None

    @property
    def data_offset(self) -> int:
        """Offset of the first content byte within the archive."""
        return self.header_offset + BLOCK_SIZE

    @property
    def padded_size(self) -> int:
        return padded_size(self.size)

    def is_file(self) -> bool:
        return isinstance(self.kind, Regular)

    def is_dir(self) -> bool:
        return isinstance(self.kind, Directory)

    def is_symlink(self) -> bool:
        return isinstance(self.kind, SymbolicLink)

    def is_hardlink(self) -> bool:
        return isinstance(self.kind, HardLink)

    def bind(self, archive: Any) -> None:
        """Attach the entry to the archive it was read from.

        Only a weak reference is kept so the entry never extends the
        archive's lifetime.
        """
        self._archive_ref = weakref.ref(archive)

    def belongs_to(self, archive: Any) -> bool:
        """Check whether the entry was read from the given archive."""
        return self._archive_ref is not None and self._archive_ref() is archive

    @property
    def archive(self) -> Any:
        """Return the owning archive.

        Raises:
            ArchiveClosedError: If the archive was closed or collected
        """
        archive = self._archive_ref() if self._archive_ref is not None else None
        if archive is None or archive.closed:
            raise ArchiveClosedError()
        return archive

    def read(self, size: int = -1) -> Any:
        """Read content bytes from the current read position.

        For entries of an ``AsyncTarArchive`` this returns a coroutine.
        """
        return self.archive.read_entry(self, size)
