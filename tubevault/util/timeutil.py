"""Utility functions for time operations."""

from datetime import datetime
from typing import Optional

# Timestamp embedded in backup file names, e.g. "2024-05-01-13_45_10"
FILENAME_TIMESTAMP_FORMAT = "%Y-%m-%d-%H_%M_%S"


def filename_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) for use inside a backup file name."""
    if moment is None:
        moment = datetime.now()
    return moment.strftime(FILENAME_TIMESTAMP_FORMAT)


def parse_filename_timestamp(value: str) -> Optional[datetime]:
    """Parse a timestamp produced by :func:`filename_timestamp`, or None."""
    try:
        return datetime.strptime(value, FILENAME_TIMESTAMP_FORMAT)
    except ValueError:
        return None
