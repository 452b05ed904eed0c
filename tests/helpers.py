"""Test helpers for building raw tar archives."""


def make_header(
    name: str,
    size: int = 0,
    type_flag: bytes = b"0",
    linkname: str = "",
    mode: int = 0o644,
    prefix: str = "",
    magic: bytes = b"ustar\x0000",
) -> bytes:
    """Build a 512-byte ustar header block with a correct checksum."""
    h = b""
    h += name.encode().ljust(100, b"\x00")
    h += f"{mode:07o}".encode() + b"\x00"
    h += b"0001750\x00"  # uid 1000
    h += b"0001750\x00"  # gid 1000
    h += f"{size:011o}".encode() + b"\x00"
    h += b"14500000000\x00"  # mtime
    h += b" " * 8  # checksum placeholder
    h += type_flag
    h += linkname.encode().ljust(100, b"\x00")
    h += magic  # magic and version
    h += b"user".ljust(32, b"\x00")
    h += b"group".ljust(32, b"\x00")
    h += b"\x00" * 16  # devmajor, devminor
    h += prefix.encode().ljust(155, b"\x00")
    h += b"\x00" * 12
    assert len(h) == 512

    checksum = sum(h)
    return h[:148] + f"{checksum:06o}".encode() + b"\x00 " + h[156:]


def pad(data: bytes) -> bytes:
    """Pad content to a whole number of blocks."""
    if len(data) % 512 == 0:
        return data
    return data + b"\x00" * (512 - len(data) % 512)


def make_archive(*members: tuple, trailer: bool = True) -> bytes:
    """Build an archive from (name, data) or (name, data, header kwargs) tuples."""
    out = b""
    for member in members:
        name, data = member[0], member[1]
        kwargs = member[2] if len(member) > 2 else {}
        out += make_header(name, len(data), **kwargs)
        out += pad(data)
    if trailer:
        out += b"\x00" * 1024
    return out
