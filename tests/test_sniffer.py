"""Tests for backup format detection."""

import io
from unittest.mock import MagicMock

import pytest

from tubevault.backup.sniffer import SQLITE_MAGIC, is_sqlite_database, sniff_backup_type
from tubevault.models import BackupType

from helpers import sqlite_bytes


class TrickleStream(io.BytesIO):
    """Stream that returns at most one byte per read."""

    def read(self, size=-1):
        return super().read(1)


class TestFormatSniffer:
    """Test detection of raw database files."""

    def test_magic_is_sixteen_bytes(self):
        """Test the SQLite header constant."""
        assert len(SQLITE_MAGIC) == 16
        assert SQLITE_MAGIC.startswith(b"SQLite format 3")

    def test_database_detected(self):
        """Test a stream starting with the SQLite header."""
        assert is_sqlite_database(io.BytesIO(sqlite_bytes(b"\x00" * 100)))

    def test_exact_header_detected(self):
        """Test a stream holding only the header."""
        assert is_sqlite_database(io.BytesIO(SQLITE_MAGIC))

    def test_json_document_not_detected(self):
        """Test a structured document."""
        assert not is_sqlite_database(io.BytesIO(b'{"subscriptions": [], "groups": null}'))

    def test_short_stream_not_detected(self):
        """Test a stream shorter than the header."""
        assert not is_sqlite_database(io.BytesIO(SQLITE_MAGIC[:15]))
        assert not is_sqlite_database(io.BytesIO(b""))

    def test_header_without_null_byte_not_detected(self):
        """Test that the terminating null byte is part of the signature."""
        assert not is_sqlite_database(io.BytesIO(b"SQLite format 3!" + b"\x00" * 20))

    def test_reads_only_the_header(self):
        """Test that no more than 16 bytes are consumed."""
        stream = io.BytesIO(sqlite_bytes(b"rest of the file"))
        is_sqlite_database(stream)
        assert stream.tell() == 16

    def test_short_reads_are_completed(self):
        """Test streams delivering the header in small pieces."""
        assert is_sqlite_database(TrickleStream(sqlite_bytes()))

    def test_read_error_is_not_database(self):
        """Test that I/O failures fall through to the document path."""
        stream = MagicMock()
        stream.read.side_effect = OSError("device unplugged")
        assert not is_sqlite_database(stream)

    @pytest.mark.parametrize("data,expected", [
        (sqlite_bytes(), BackupType.DATABASE),
        (b"{}", BackupType.JSON),
        (b"SQLite", BackupType.JSON),
    ])
    def test_sniff_backup_type(self, data, expected):
        """Test classification into backup types."""
        assert sniff_backup_type(io.BytesIO(data)) is expected
