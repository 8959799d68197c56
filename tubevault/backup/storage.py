"""Backup file storage layout and management."""

import typing as t
from datetime import datetime
from pathlib import Path

from ..models.options import BackupType
from ..util.logging import get_logger
from ..util.paths import safe_filename
from ..util.timeutil import filename_timestamp, parse_filename_timestamp

logger = get_logger(__name__)

BACKUP_EXTENSIONS = tuple(f".{backup_type.file_extension}" for backup_type in BackupType)
STAMP_LENGTH = len(filename_timestamp(datetime(2000, 1, 1)))


class BackupStorage:
    """Manages the directory backups are written to and restored from."""

    def __init__(self, base_path: Path) -> None:
        """Initialize backup storage.

        Args:
            base_path: Directory holding backup files
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def export_file_name(
        name: str,
        backup_type: BackupType,
        include_timestamp: bool = True,
        timestamp: t.Optional[datetime] = None
    ) -> str:
        """Build the file name of a backup.

        Args:
            name: Base name, e.g. "tubevault-backup"
            backup_type: Type of the backup, selects the extension
            include_timestamp: Append the creation time to the name
            timestamp: Creation time (uses current time if None)

        Returns:
            File name like ``name_2024-05-01-13_45_10.json``
        """
        name = safe_filename(name)
        if include_timestamp:
            name = f"{name}_{filename_timestamp(timestamp)}"
        return f"{name}.{backup_type.file_extension}"

    def get_backup_path(self, file_name: str) -> Path:
        """Get path of a backup file inside the storage directory."""
        return self.base_path / safe_filename(file_name)

    def open_read(self, file_name: str) -> t.BinaryIO:
        return open(self.get_backup_path(file_name), "rb")

    def open_write(self, file_name: str) -> t.BinaryIO:
        return open(self.get_backup_path(file_name), "wb")

    def opener(self, file_name: str) -> t.Callable[[], t.BinaryIO]:
        """Stream factory for restoring a stored backup."""
        return lambda: self.open_read(file_name)

    def list_backups(self) -> t.List[Path]:
        """List backup files, newest first."""
        backups = [
            p for p in self.base_path.iterdir()
            if p.is_file() and p.suffix in BACKUP_EXTENSIONS
        ]
        return sorted(backups, key=lambda p: (self.backup_time(p), p.name), reverse=True)

    @staticmethod
    def backup_time(path: Path) -> datetime:
        """Creation time of a backup.

        Taken from the timestamp in the file name, or the modification time
        for files without one.
        """
        stem = path.stem
        if len(stem) > STAMP_LENGTH and stem[-STAMP_LENGTH - 1] == "_":
            created = parse_filename_timestamp(stem[-STAMP_LENGTH:])
            if created is not None:
                return created
        return datetime.fromtimestamp(path.stat().st_mtime)

    def get_latest_backup(self) -> t.Optional[Path]:
        backups = self.list_backups()
        return backups[0] if backups else None

    def prune(self, max_files: int) -> t.List[Path]:
        """Delete the oldest backups beyond ``max_files``.

        Args:
            max_files: Number of backups to keep; 0 or less keeps everything

        Returns:
            Paths of the deleted backups
        """
        if max_files <= 0:
            return []

        removed = []
        for backup in self.list_backups()[max_files:]:
            try:
                backup.unlink()
                removed.append(backup)
                logger.debug(f"Removed old backup {backup.name}")
            except OSError as e:
                logger.warning(f"Could not remove old backup {backup}: {e}")

        return removed
