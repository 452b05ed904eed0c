"""Example usage of the ustar archive reader."""

import asyncio
import logging
import sys

# Add parent directory to path
sys.path.insert(0, "src")

from ustar_reader import AsyncTarArchive, TarArchiveError, open_archive

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def list_entries(tar_path: str) -> None:
    """List archive entries synchronously."""
    try:
        with open_archive(tar_path) as archive:
            entries = archive.entries()
            logger.info(f"Found {len(entries)} entries in {tar_path}")
            for entry in entries:
                target = f" -> {entry.link_target}" if entry.link_target else ""
                logger.info(
                    f"  {entry.header_offset:>10} {entry.mode:04o} "
                    f"{entry.size:>10} {entry.path}{target}"
                )
    except TarArchiveError as e:
        logger.error(f"Archive error: {e}")


async def preview_files(tar_path: str, limit: int = 64) -> None:
    """Print the first bytes of every regular file."""
    try:
        async with AsyncTarArchive(tar_path) as archive:
            async for entry in archive.iter_entries():
                if entry.is_file():
                    head = await archive.read_entry(entry, limit)
                    logger.info(f"{entry.path}: {head!r}")
    except TarArchiveError as e:
        logger.error(f"Archive error: {e}")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(f"usage: {sys.argv[0]} ARCHIVE.tar")
        sys.exit(1)

    print("=== Entries ===")
    list_entries(sys.argv[1])

    print("\n=== File previews ===")
    asyncio.run(preview_files(sys.argv[1]))
