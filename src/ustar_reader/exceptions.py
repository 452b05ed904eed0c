"""Custom exceptions for the ustar archive reader."""


class TarArchiveError(Exception):
    """Base exception for all archive-related errors."""

    pass


class ArchiveOpenError(TarArchiveError):
    """Raised when the underlying archive stream cannot be opened."""

    pass


class ArchiveClosedError(TarArchiveError):
    """Raised when an operation is attempted on a closed archive."""

    def __init__(self, message: str = "archive is closed") -> None:
        super().__init__(message)


class ShortReadError(TarArchiveError):
    """Raised when fewer bytes than a full block could be read."""

    def __init__(self, identifier: str, expected: int, actual: int) -> None:
        self.identifier = identifier
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Short read on {identifier}: expected {expected}, got {actual}"
        )


class ChecksumError(TarArchiveError):
    """Raised when a header block fails its checksum."""

    def __init__(self, offset: int) -> None:
        self.offset = offset
        super().__init__("Checksum failure")


class ValidationError(TarArchiveError):
    """Raised when an archive path cannot be validated."""

    pass
