"""Utility functions for path operations."""

import re
from pathlib import Path
from typing import List

# Characters that are not allowed in file names on common file systems
_UNSAFE_CHARS = re.compile(r'[/\\:*?"<>|\r\n\t]')

SIDECAR_SUFFIXES = ("-wal", "-shm", "-journal")


def ensure_directory(path: Path) -> Path:
    """Ensure directory exists, creating it if necessary."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def safe_filename(filename: str, fallback: str = "backup") -> str:
    """Replace characters that cannot appear in a backup file name."""
    safe_name = _UNSAFE_CHARS.sub("_", filename).strip(" .")
    return safe_name or fallback


def sidecar_paths(database_path: Path) -> List[Path]:
    """SQLite journal files that live next to a database file."""
    return [database_path.with_name(database_path.name + suffix) for suffix in SIDECAR_SUFFIXES]
