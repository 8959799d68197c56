"""Utility functions for hashing operations."""

import hashlib
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from ..util.logging import get_logger

logger = get_logger(__name__)


def calculate_file_hash(
    file_path: Path,
    algorithm: str = "sha256",
    chunk_size: int = 8192
) -> Optional[str]:
    """Calculate hash of a file."""
    try:
        hasher = hashlib.new(algorithm)

        with open(file_path, "rb") as f:
            while chunk := f.read(chunk_size):
                hasher.update(chunk)

        return hasher.hexdigest()
    except OSError as e:
        logger.error(f"Failed to calculate hash for {file_path}: {e}")
        return None


def copy_stream_with_hash(
    source: BinaryIO,
    destination: BinaryIO,
    algorithm: str = "sha256",
    chunk_size: int = 65536
) -> Tuple[int, str]:
    """Copy a binary stream into another, hashing the bytes on the way.

    Returns:
        Tuple of (bytes copied, hex digest of the copied bytes)
    """
    hasher = hashlib.new(algorithm)
    copied = 0

    while chunk := source.read(chunk_size):
        destination.write(chunk)
        hasher.update(chunk)
        copied += len(chunk)

    return copied, hasher.hexdigest()


def verify_file_integrity(file_path: Path, expected_hash: str, algorithm: str = "sha256") -> bool:
    """Verify file integrity against expected hash."""
    actual_hash = calculate_file_hash(file_path, algorithm)

    if actual_hash is None:
        return False

    return actual_hash.lower() == expected_hash.lower()
