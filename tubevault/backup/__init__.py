"""Backup module initialization."""

from .errors import (
    BackupError,
    CorruptedDocumentError,
    ExportError,
    FileSwapError,
    PartialTypeMismatchError,
    StoreWriteError,
    UnreadableSourceError,
)
from .exporter import BackupExporter
from .preferences import (
    apply_preference,
    decode_preference,
    encode_preference,
    export_preferences,
    restore_preferences,
)
from .restore import RestoreEngine, as_opener
from .sniffer import SQLITE_MAGIC, is_sqlite_database, sniff_backup_type
from .storage import BackupStorage
from .swap import DatabaseSwapHandler
from .worker import BackupWorker

__all__ = [
    # errors
    "BackupError",
    "CorruptedDocumentError",
    "ExportError",
    "FileSwapError",
    "PartialTypeMismatchError",
    "StoreWriteError",
    "UnreadableSourceError",
    # exporter
    "BackupExporter",
    # preferences
    "apply_preference",
    "decode_preference",
    "encode_preference",
    "export_preferences",
    "restore_preferences",
    # restore
    "RestoreEngine",
    "as_opener",
    # sniffer
    "SQLITE_MAGIC",
    "is_sqlite_database",
    "sniff_backup_type",
    # storage
    "BackupStorage",
    # swap
    "DatabaseSwapHandler",
    # worker
    "BackupWorker",
]
