"""Tests for backup export."""

import io
import json
from unittest.mock import MagicMock

import pytest

from tubevault.backup.errors import ExportError
from tubevault.backup.exporter import BackupExporter
from tubevault.config import BackupConfig
from tubevault.models import BackupOptions, LocalSubscription

from helpers import only, sqlite_bytes


def export_json(exporter: BackupExporter, options: BackupOptions) -> dict:
    destination = io.BytesIO()
    exporter.create_selective_backup(destination, options)
    return json.loads(destination.getvalue().decode("utf-8"))


class TestSelectiveBackup:
    """Test structured JSON exports."""

    def test_only_subscriptions(self, store, prefs):
        """Test a backup of three subscriptions and nothing else."""
        store.subscriptions.insert_all([
            LocalSubscription(channel_id=f"UC{i}", name=f"Channel {i}") for i in range(3)
        ])
        exporter = BackupExporter(store, prefs)

        data = export_json(exporter, only(include_subscriptions=True))

        assert [s["channelId"] for s in data["subscriptions"]] == ["UC0", "UC1", "UC2"]
        for category in ("localPlaylists", "watchHistory", "watchPositions", "searchHistory",
                         "playlistBookmarks", "groups", "preferences"):
            assert data[category] is None

    def test_selected_empty_category_is_empty_list(self, store, prefs):
        """Test that a selected category without data is written as []."""
        exporter = BackupExporter(store, prefs)

        data = export_json(exporter, only(include_groups=True, include_watch_history=True))

        assert data["groups"] == []
        assert data["watchHistory"] == []
        assert data["subscriptions"] is None

    def test_everything(self, populated_store, populated_prefs):
        """Test a backup of every category."""
        exporter = BackupExporter(populated_store, populated_prefs)

        data = export_json(exporter, BackupOptions.everything())

        assert len(data["subscriptions"]) == 2
        assert len(data["localPlaylists"]) == 1
        assert [v["videoId"] for v in data["localPlaylists"][0]["videos"]] == ["vid1", "vid2", "vid3"]
        assert len(data["watchHistory"]) == 2
        assert len(data["watchPositions"]) == 2
        assert len(data["searchHistory"]) == 2
        assert data["playlistBookmarks"][0]["playlistId"] == "PL_remote"
        assert data["groups"][0]["channels"] == ["UC_alpha"]
        assert {p["key"] for p in data["preferences"]} >= {"region", "sponsor_color"}

    def test_default_options_from_config(self, populated_store, prefs):
        """Test that configured defaults apply when no options are given."""
        config = BackupConfig(default_options=only(include_search_history=True))
        exporter = BackupExporter(populated_store, prefs, config)
        destination = io.BytesIO()

        exporter.create_selective_backup(destination)

        data = json.loads(destination.getvalue())
        assert len(data["searchHistory"]) == 2
        assert data["subscriptions"] is None

    def test_compact_output(self, store, prefs):
        """Test that indent None writes a single line."""
        exporter = BackupExporter(store, prefs, BackupConfig(json_indent=None))
        destination = io.BytesIO()

        exporter.create_selective_backup(destination, BackupOptions.nothing())

        assert b"\n" not in destination.getvalue()

    def test_write_failure(self, populated_store, prefs):
        """Test a destination that rejects writes."""
        destination = MagicMock()
        destination.write.side_effect = OSError("no space left on device")
        exporter = BackupExporter(populated_store, prefs)

        with pytest.raises(ExportError):
            exporter.create_selective_backup(destination, BackupOptions.everything())

    def test_read_failure(self, prefs):
        """Test a store that fails while being read."""
        store = MagicMock()
        store.subscriptions.get_all.side_effect = RuntimeError("database is locked")
        exporter = BackupExporter(store, prefs)

        with pytest.raises(ExportError):
            exporter.create_selective_backup(io.BytesIO(), only(include_subscriptions=True))

    def test_data_counts(self, populated_store, prefs):
        """Test record counts per category."""
        counts = BackupExporter(populated_store, prefs).get_data_counts()

        assert counts == {
            "subscriptions": 2,
            "playlists": 1,
            "watch_history": 2,
            "watch_positions": 2,
            "search_history": 2,
            "playlist_bookmarks": 1,
            "groups": 1,
        }


class TestDatabaseExport:
    """Test raw database exports."""

    def test_byte_for_byte_copy(self, store, prefs):
        """Test that the database file is copied unchanged."""
        content = sqlite_bytes(bytes(range(256)) * 1000)
        store.database_path.parent.mkdir(parents=True)
        store.database_path.write_bytes(content)
        exporter = BackupExporter(store, prefs, BackupConfig(chunk_size=1024))
        destination = io.BytesIO()

        exporter.export_database(destination)

        assert destination.getvalue() == content

    def test_missing_database(self, store, prefs):
        """Test exporting when the database file does not exist."""
        exporter = BackupExporter(store, prefs)

        with pytest.raises(ExportError):
            exporter.export_database(io.BytesIO())

    def test_destination_failure(self, store, prefs):
        """Test a destination that fails mid-copy."""
        store.database_path.parent.mkdir(parents=True)
        store.database_path.write_bytes(sqlite_bytes())
        destination = MagicMock()
        destination.write.side_effect = OSError("broken pipe")

        with pytest.raises(ExportError):
            BackupExporter(store, prefs).export_database(destination)

    def test_unknown_hash_algorithm(self, store, prefs):
        """Test that a misconfigured hash algorithm is reported as an export failure."""
        store.database_path.parent.mkdir(parents=True)
        store.database_path.write_bytes(sqlite_bytes())
        exporter = BackupExporter(store, prefs, BackupConfig(hash_algorithm="no-such-hash"))

        with pytest.raises(ExportError) as excinfo:
            exporter.export_database(io.BytesIO())

        assert isinstance(excinfo.value.__cause__, ValueError)
