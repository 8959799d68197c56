"""Tests for backup file storage."""

import os
from datetime import datetime

import pytest

from tubevault.backup.restore import RestoreEngine
from tubevault.backup.storage import BackupStorage
from tubevault.models import BackupType
from tubevault.util.timeutil import parse_filename_timestamp


def make_backups(storage, names):
    """Create backup files with increasing modification times."""
    paths = []
    for i, name in enumerate(names):
        path = storage.get_backup_path(name)
        path.write_text("{}")
        os.utime(path, (1_700_000_000 + i * 60, 1_700_000_000 + i * 60))
        paths.append(path)
    return paths


class TestBackupStorage:
    """Test backup file naming, listing and retention."""

    @pytest.mark.parametrize("backup_type,include_timestamp,expected", [
        (BackupType.JSON, True, "tubevault-backup_2024-05-01-13_45_10.json"),
        (BackupType.DATABASE, True, "tubevault-backup_2024-05-01-13_45_10.db"),
        (BackupType.JSON, False, "tubevault-backup.json"),
    ])
    def test_export_file_name(self, backup_type, include_timestamp, expected):
        """Test backup file names."""
        name = BackupStorage.export_file_name(
            "tubevault-backup",
            backup_type,
            include_timestamp=include_timestamp,
            timestamp=datetime(2024, 5, 1, 13, 45, 10),
        )
        assert name == expected

    def test_timestamp_parsed_back(self):
        """Test that the name timestamp can be read back."""
        name = BackupStorage.export_file_name("b", BackupType.JSON, timestamp=datetime(2023, 12, 31, 23, 59, 1))
        stamp = name[len("b_"):-len(".json")]
        assert parse_filename_timestamp(stamp) == datetime(2023, 12, 31, 23, 59, 1)
        assert parse_filename_timestamp("yesterday") is None

    def test_unsafe_names_sanitized(self, tmp_path):
        """Test that names cannot escape the storage directory."""
        storage = BackupStorage(tmp_path)
        path = storage.get_backup_path("../evil/name.json")
        assert path.parent == tmp_path

    def test_base_path_created(self, tmp_path):
        """Test that a missing storage directory is created."""
        BackupStorage(tmp_path / "a" / "b")
        assert (tmp_path / "a" / "b").is_dir()

    def test_write_and_read(self, tmp_path):
        """Test the stream factories."""
        storage = BackupStorage(tmp_path)
        with storage.open_write("backup.json") as f:
            f.write(b'{"groups": []}')

        with storage.opener("backup.json")() as f:
            assert f.read() == b'{"groups": []}'

    def test_list_backups_newest_first(self, tmp_path):
        """Test listing ignores unrelated files and sorts by age."""
        storage = BackupStorage(tmp_path)
        old, middle, new = make_backups(storage, ["a.json", "b.db", "c.json"])
        (tmp_path / "notes.txt").write_text("not a backup")
        (tmp_path / "nested.json").mkdir()

        assert storage.list_backups() == [new, middle, old]
        assert storage.get_latest_backup() == new

    def test_list_backups_by_name_timestamp(self, tmp_path):
        """Test that the timestamp in the name wins over the modification time."""
        storage = BackupStorage(tmp_path)
        names = [
            BackupStorage.export_file_name("backup", BackupType.JSON, timestamp=datetime(2024, 1, day))
            for day in (3, 2, 1)
        ]
        newest, middle, oldest = make_backups(storage, names)

        assert storage.list_backups() == [newest, middle, oldest]
        assert BackupStorage.backup_time(newest) == datetime(2024, 1, 3)
        assert storage.prune(1) == [middle, oldest]

    def test_latest_backup_empty(self, tmp_path):
        """Test an empty storage directory."""
        assert BackupStorage(tmp_path).get_latest_backup() is None

    def test_prune(self, tmp_path):
        """Test that only the newest backups are kept."""
        storage = BackupStorage(tmp_path)
        paths = make_backups(storage, [f"backup-{i}.json" for i in range(5)])

        removed = storage.prune(2)

        assert sorted(removed) == sorted(paths[:3])
        assert storage.list_backups() == [paths[4], paths[3]]

    @pytest.mark.parametrize("max_files", [0, -1, 10])
    def test_prune_keeps_everything(self, tmp_path, max_files):
        """Test limits that remove nothing."""
        storage = BackupStorage(tmp_path)
        make_backups(storage, ["a.json", "b.json"])

        assert storage.prune(max_files) == []
        assert len(storage.list_backups()) == 2

    def test_restore_from_storage(self, tmp_path, store, prefs):
        """Test restoring a stored backup through its stream factory."""
        storage = BackupStorage(tmp_path)
        with storage.open_write("backup.json") as f:
            f.write(b'{"searchHistory": [{"query": "jazz"}]}')

        stats = RestoreEngine(store, prefs).restore_selective(storage.opener("backup.json"))

        assert stats.search_history_imported == 1
