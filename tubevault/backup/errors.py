"""Errors raised by backup and restore operations."""


class BackupError(Exception):
    """Base error for backup and restore operations."""
    pass


class UnreadableSourceError(BackupError):
    """The backup source could not be opened or read."""
    pass


class CorruptedDocumentError(BackupError):
    """The structured backup document could not be deserialized."""
    pass


class PartialTypeMismatchError(BackupError):
    """A single preference value could not be coerced to a native type."""

    def __init__(self, key: str, value: object, reason: str = ""):
        self.key = key
        self.value = value
        message = f"Cannot restore preference {key!r} from {value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StoreWriteError(BackupError):
    """The store rejected an insert or create call."""
    pass


class FileSwapError(BackupError):
    """Replacing the database file with a raw backup failed."""
    pass


class ExportError(BackupError):
    """Writing a backup to its destination failed."""
    pass
