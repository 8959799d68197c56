"""Replacement of the live database file with a raw backup."""

import os
import tempfile
from pathlib import Path
from typing import BinaryIO

from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..store.base import EntityStore
from ..util.hashing import copy_stream_with_hash
from ..util.logging import get_logger
from ..util.paths import ensure_directory, sidecar_paths
from .errors import FileSwapError
from .sniffer import is_sqlite_database

logger = get_logger(__name__)


@retry(
    retry=retry_if_exception_type(PermissionError),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, min=0.1, max=1),
    reraise=True,
)
def _replace_file(source: Path, target: Path) -> None:
    """Atomically move a file over another, retrying while it is locked."""
    os.replace(source, target)


class DatabaseSwapHandler:
    """Swaps the database file of a store for the content of a stream.

    The stream is copied into a temporary file next to the database and
    only moved over it once the copy is complete, so a failed copy leaves
    the original file untouched. The store is closed first and is not
    reopened here; callers must reinitialize it before using it again.
    """

    def __init__(self, store: EntityStore, chunk_size: int = 65536):
        self.store = store
        self.chunk_size = chunk_size

    def swap(self, source: BinaryIO) -> Path:
        """Replace the database file with the bytes of ``source``.

        Returns:
            Path of the replaced database file

        Raises:
            FileSwapError: if the copy or the replacement failed
        """
        database_path = Path(self.store.database_path)

        logger.info(f"Closing store before replacing {database_path}")
        self.store.close()

        temp_path = None
        try:
            ensure_directory(database_path.parent)
            fd, temp_name = tempfile.mkstemp(
                prefix=f"{database_path.name}.", suffix=".restore", dir=database_path.parent
            )
            temp_path = Path(temp_name)

            with os.fdopen(fd, "wb") as temp_file:
                copied, digest = copy_stream_with_hash(source, temp_file, chunk_size=self.chunk_size)
                temp_file.flush()
                os.fsync(temp_file.fileno())

            logger.debug(f"Copied {copied} bytes (sha256 {digest}) to {temp_path}")

            with open(temp_path, "rb") as copied_file:
                if not is_sqlite_database(copied_file):
                    raise FileSwapError("Copied data is not a database file")

            _replace_file(temp_path, database_path)
            temp_path = None

        except FileSwapError:
            raise
        except Exception as e:
            raise FileSwapError(f"Failed to replace {database_path}: {e}") from e
        finally:
            if temp_path is not None:
                temp_path.unlink(missing_ok=True)

        # Journals of the old database would be replayed onto the new one
        for sidecar in sidecar_paths(database_path):
            if sidecar.exists():
                try:
                    sidecar.unlink()
                    logger.debug(f"Removed stale {sidecar.name}")
                except OSError as e:
                    logger.warning(f"Could not remove stale {sidecar}: {e}")

        logger.info(f"Replaced database file {database_path}")
        return database_path
