"""Detection of the backup format from the content of a stream."""

from typing import BinaryIO

from ..models.options import BackupType
from ..util.logging import get_logger

logger = get_logger(__name__)

SQLITE_MAGIC = b"SQLite format 3\x00"
HEADER_SIZE = len(SQLITE_MAGIC)


def is_sqlite_database(stream: BinaryIO) -> bool:
    """Check whether a stream starts with the SQLite file header.

    Reads the first 16 bytes only; callers that need the whole content
    again have to reopen the source. Streams shorter than the header and
    read errors count as "not a database", so unknown input falls through
    to the structured document path.
    """
    try:
        header = b""
        while len(header) < HEADER_SIZE:
            chunk = stream.read(HEADER_SIZE - len(header))
            if not chunk:
                break
            header += chunk
    except (OSError, ValueError) as e:
        logger.debug(f"Could not read backup header: {e}")
        return False

    return header == SQLITE_MAGIC


def sniff_backup_type(stream: BinaryIO) -> BackupType:
    """Classify a stream as a raw database or a structured document."""
    return BackupType.DATABASE if is_sqlite_database(stream) else BackupType.JSON
