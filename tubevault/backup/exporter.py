"""Backup export engine."""

from pathlib import Path
from typing import BinaryIO, Dict, Optional

from ..config import BackupConfig
from ..models.document import BackupDocument
from ..models.options import BackupOptions
from ..store.base import EntityStore, PreferenceStore
from ..util.hashing import copy_stream_with_hash, verify_file_integrity
from ..util.logging import get_logger
from .errors import ExportError
from .preferences import export_preferences

logger = get_logger(__name__)


class BackupExporter:
    """Writes backups of a store as a raw database copy or a JSON document."""

    def __init__(
        self,
        store: EntityStore,
        prefs: PreferenceStore,
        config: Optional[BackupConfig] = None
    ) -> None:
        """Initialize backup exporter.

        Args:
            store: Store to read entities and the database file from
            prefs: Preference store to read preferences from
            config: Export settings (defaults when None)
        """
        self.store = store
        self.prefs = prefs
        self.config = config or BackupConfig()

    def build_document(self, options: BackupOptions) -> BackupDocument:
        """Collect the selected categories into a backup document.

        Unselected categories stay None so a restore can tell them apart
        from selected categories without data.
        """
        store = self.store

        return BackupDocument(
            subscriptions=store.subscriptions.get_all() if options.include_subscriptions else None,
            local_playlists=store.local_playlists.get_all() if options.include_playlists else None,
            watch_history=store.watch_history.get_all() if options.include_watch_history else None,
            watch_positions=store.watch_positions.get_all() if options.include_watch_positions else None,
            search_history=store.search_history.get_all() if options.include_search_history else None,
            playlist_bookmarks=(
                store.playlist_bookmarks.get_all() if options.include_playlist_bookmarks else None
            ),
            groups=store.groups.get_all() if options.include_groups else None,
            preferences=export_preferences(self.prefs) if options.include_preferences else None,
        )

    def create_selective_backup(self, destination: BinaryIO, options: Optional[BackupOptions] = None) -> None:
        """Write the selected categories as a JSON document.

        Args:
            destination: Writable binary stream
            options: Categories to include (configured defaults when None)

        Raises:
            ExportError: if reading, serializing or writing failed
        """
        if options is None:
            options = self.config.default_options

        try:
            document = self.build_document(options)
            payload = document.to_json(indent=self.config.json_indent).encode("utf-8")
            destination.write(payload)
            destination.flush()
        except Exception as e:
            raise ExportError(f"Failed to write JSON backup: {e}") from e

        logger.info(f"Wrote JSON backup ({len(payload)} bytes)")

    def export_database(self, destination: BinaryIO) -> None:
        """Copy the database file byte-for-byte to a stream.

        Raises:
            ExportError: if the file could not be read or the copy is incomplete
        """
        database_path = Path(self.store.database_path)

        try:
            with open(database_path, "rb") as source:
                copied, digest = copy_stream_with_hash(
                    source,
                    destination,
                    algorithm=self.config.hash_algorithm,
                    chunk_size=self.config.chunk_size,
                )
            destination.flush()
        except Exception as e:
            raise ExportError(f"Failed to copy database {database_path}: {e}") from e

        if self.config.verify_integrity and not verify_file_integrity(
            database_path, digest, self.config.hash_algorithm
        ):
            raise ExportError(f"Database {database_path} changed while it was copied")

        logger.info(f"Exported database {database_path} ({copied} bytes)")

    def get_data_counts(self) -> Dict[str, int]:
        """Number of records per category, for presenting export choices."""
        store = self.store
        return {
            "subscriptions": len(store.subscriptions.get_all()),
            "playlists": len(store.local_playlists.get_all()),
            "watch_history": len(store.watch_history.get_all()),
            "watch_positions": len(store.watch_positions.get_all()),
            "search_history": len(store.search_history.get_all()),
            "playlist_bookmarks": len(store.playlist_bookmarks.get_all()),
            "groups": len(store.groups.get_all()),
        }
