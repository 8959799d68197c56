"""Helpers shared by the test modules."""

import io

from tubevault.backup.sniffer import SQLITE_MAGIC
from tubevault.models import BackupOptions


class FailingStream(io.BytesIO):
    """Stream that raises ``error`` after delivering its first chunk."""

    def __init__(self, data: bytes, error: Exception = None):
        super().__init__(data)
        self.error = error or OSError("connection reset")
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if self.reads > 1:
            raise self.error
        return super().read(size)


def only(**flags) -> BackupOptions:
    """Options with just the given categories selected."""
    return BackupOptions.nothing().model_copy(update=flags)


def sqlite_bytes(payload: bytes = b"") -> bytes:
    """Bytes that look like a SQLite database file."""
    return SQLITE_MAGIC + b"\x10\x00\x01\x01" + payload
