"""Utility module initialization."""

from .hashing import calculate_file_hash, copy_stream_with_hash, verify_file_integrity
from .logging import get_logger, setup_logging
from .paths import ensure_directory, safe_filename, sidecar_paths
from .timeutil import filename_timestamp, parse_filename_timestamp

__all__ = [
    # hashing
    "calculate_file_hash",
    "copy_stream_with_hash",
    "verify_file_integrity",
    # logging
    "get_logger",
    "setup_logging",
    # paths
    "ensure_directory",
    "safe_filename",
    "sidecar_paths",
    # timeutil
    "filename_timestamp",
    "parse_filename_timestamp",
]
