"""Selective in-memory extraction of zip archive entries."""

import asyncio
import logging
import zipfile
from pathlib import Path
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

# Called with the lowercased entry name; True selects the entry
EntryFilter = Callable[[str], bool]

READ_CHUNK_SIZE = 65536  # 64KB chunks


def _buffer_entry(zf: zipfile.ZipFile, info: zipfile.ZipInfo, chunk_size: int) -> bytes:
    """Read an entry's decompressed content, concatenating chunks in arrival order."""
    chunks: List[bytes] = []
    with zf.open(info) as stream:
        while chunk := stream.read(chunk_size):
            chunks.append(chunk)
    return b"".join(chunks)


def scan_archive(
    archive_path: Path | str,
    entry_filter: EntryFilter,
    chunk_size: int = READ_CHUNK_SIZE,
) -> Dict[str, bytes]:
    """Buffer every entry of a zip archive accepted by a filter.

    Entries are visited one at a time in archive order. A selected entry is
    fully buffered before the next entry is looked at. Keys are lowercased
    entry names; the original case is not kept.

    Args:
        archive_path: Path to the zip archive
        entry_filter: Predicate over the lowercased entry name
        chunk_size: Read size when buffering an entry

    Returns:
        Mapping of lowercased entry name to decompressed content

    Raises:
        OSError: If the archive cannot be opened
        zipfile.BadZipFile: If the file is not a zip archive or an entry is damaged
        NotImplementedError: If a selected entry uses an unsupported compression method
        RuntimeError: If a selected entry is encrypted
    """
    archive_path = Path(archive_path)
    result: Dict[str, bytes] = {}
    scanned = 0

    logger.debug(f"Opening archive {archive_path}")

    with zipfile.ZipFile(archive_path) as zf:
        for info in zf.infolist():
            scanned += 1
            name = info.filename.lower()

            if not entry_filter(name):
                continue

            try:
                result[name] = _buffer_entry(zf, info, chunk_size)
            except Exception as e:
                logger.error(f"Failed to read {info.filename} from {archive_path.name}: {e}")
                raise

            logger.debug(f"Buffered {name} ({len(result[name])} bytes)")

    logger.debug(
        f"Scanned {scanned} entries in {archive_path.name}, selected {len(result)}"
    )
    return result


async def read_zip(
    archive_path: Path | str,
    entry_filter: EntryFilter,
    chunk_size: int = READ_CHUNK_SIZE,
) -> Dict[str, bytes]:
    """Async variant of :func:`scan_archive`.

    The scan runs in a worker thread and the result is handed back once the
    archive has been closed.
    """
    return await asyncio.to_thread(scan_archive, archive_path, entry_filter, chunk_size)
