"""Backup restore and merge engine."""

from pathlib import Path
from typing import BinaryIO, Callable, List, Optional, TypeVar, Union

from pydantic import ValidationError
from tqdm import tqdm

from ..config import RestoreConfig
from ..models.document import BackupDocument, LocalPlaylistWithVideos
from ..models.options import BackupOptions, BackupType, RestoreResult, RestoreStats
from ..store.base import EntityStore, NotificationScheduler, PreferenceStore
from ..util.logging import get_logger
from .errors import CorruptedDocumentError, StoreWriteError, UnreadableSourceError
from .preferences import restore_preferences
from .sniffer import sniff_backup_type
from .swap import DatabaseSwapHandler

logger = get_logger(__name__)

T = TypeVar("T")

SourceOpener = Callable[[], BinaryIO]
BackupSource = Union[str, Path, SourceOpener]
ProgressCallback = Callable[[int, int, str], None]


def as_opener(source: BackupSource) -> SourceOpener:
    """Turn a path or a stream factory into a stream factory."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        return lambda: open(path, "rb")
    return source


class RestoreEngine:
    """Restores raw database backups and merges JSON backups into a store."""

    def __init__(
        self,
        store: EntityStore,
        prefs: PreferenceStore,
        scheduler: Optional[NotificationScheduler] = None,
        config: Optional[RestoreConfig] = None,
        swap_handler: Optional[DatabaseSwapHandler] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.store = store
        self.prefs = prefs
        self.scheduler = scheduler
        self.config = config or RestoreConfig()
        self.swap_handler = swap_handler or DatabaseSwapHandler(store)
        self.progress_callback = progress_callback

    def restore(self, source: BackupSource, options: Optional[BackupOptions] = None) -> RestoreResult:
        """Restore a backup of either type, detected from its content.

        Args:
            source: Path of the backup or a callable opening it as a binary stream.
                The source is opened once for detection and once for the restore.
            options: Categories to merge from a JSON backup (all when None)

        Raises:
            UnreadableSourceError: if the source cannot be opened or read
            CorruptedDocumentError: if a JSON backup cannot be parsed
            FileSwapError: if replacing the database file failed
        """
        opener = as_opener(source)

        if self.detect_type(opener) is BackupType.DATABASE:
            self.restore_database(opener)
            return RestoreResult(BackupType.DATABASE)

        stats = self.restore_selective(opener, options)
        return RestoreResult(BackupType.JSON, stats)

    def detect_type(self, opener: SourceOpener) -> BackupType:
        with self._open(opener) as stream:
            backup_type = sniff_backup_type(stream)
        logger.debug(f"Detected backup type: {backup_type.value}")
        return backup_type

    def restore_database(self, source: BackupSource) -> None:
        """Replace the database file with a raw backup and reopen the store.

        The store must not be used by anything else while this runs.
        """
        opener = as_opener(source)

        with self._open(opener) as stream:
            try:
                self.swap_handler.swap(stream)
            except Exception:
                # The original file is intact, make the store usable again
                self.store.reinitialize()
                raise

        self.store.reinitialize()
        logger.info("Database restored, restart required")

    def read_document(self, source: BackupSource) -> BackupDocument:
        """Read and parse a JSON backup without touching the store."""
        opener = as_opener(source)

        with self._open(opener) as stream:
            try:
                data = stream.read()
            except OSError as e:
                raise UnreadableSourceError(f"Failed to read backup: {e}") from e

        try:
            return BackupDocument.from_json(data)
        except (ValidationError, ValueError) as e:
            raise CorruptedDocumentError(f"Backup file is corrupted: {e}") from e

    def restore_selective(self, source: BackupSource, options: Optional[BackupOptions] = None) -> RestoreStats:
        """Parse a JSON backup and merge the selected categories."""
        document = self.read_document(source)
        return self.restore_document(document, options)

    def restore_document(self, document: BackupDocument, options: Optional[BackupOptions] = None) -> RestoreStats:
        """Merge the selected categories of a parsed backup into the store.

        Categories missing from the document or not selected are skipped.
        Records the store rejects are logged and left out of the counts.
        """
        if options is None:
            options = BackupOptions.everything()

        store = self.store
        stats = RestoreStats()

        if options.include_subscriptions and document.subscriptions is not None:
            stats.subscriptions_imported += self._merge_records(
                "subscriptions", document.subscriptions, store.subscriptions.insert
            )

        if options.include_playlists and document.local_playlists is not None:
            stats.playlists_imported += self._merge_playlists(document.local_playlists)

        if options.include_watch_history and document.watch_history is not None:
            stats.watch_history_imported += self._merge_records(
                "watch history", document.watch_history, store.watch_history.insert
            )

        if options.include_watch_positions and document.watch_positions is not None:
            stats.watch_positions_imported += self._merge_records(
                "watch positions", document.watch_positions, store.watch_positions.insert
            )

        if options.include_search_history and document.search_history is not None:
            stats.search_history_imported += self._merge_records(
                "search history", document.search_history, store.search_history.insert
            )

        if options.include_playlist_bookmarks and document.playlist_bookmarks is not None:
            stats.playlist_bookmarks_imported += self._merge_records(
                "playlist bookmarks", document.playlist_bookmarks, store.playlist_bookmarks.insert
            )

        if options.include_groups and document.groups is not None:
            stats.groups_imported += self._merge_records("groups", document.groups, store.groups.insert)

        if options.include_preferences and document.preferences is not None:
            restore_preferences(self.prefs, document.preferences, self.scheduler)
            stats.preferences_restored = True

        logger.info(f"Restore completed: {stats.total_items_imported} items imported")

        return stats

    def _merge_records(self, label: str, records: List[T], insert: Callable[[T], None]) -> int:
        """Insert records one by one, skipping the ones the store rejects."""
        merged = 0
        total = len(records)

        with self._progress_bar(total, f"Restoring {label}", "item") as pbar:
            for i, record in enumerate(records):
                if self.progress_callback:
                    self.progress_callback(i + 1, total, label)

                try:
                    self._insert(insert, record, label)
                    merged += 1
                except StoreWriteError as e:
                    logger.warning(str(e))

                pbar.update(1)

        logger.info(f"Restored {merged}/{total} {label}")
        return merged

    def _merge_playlists(self, playlists: List[LocalPlaylistWithVideos]) -> int:
        """Create each playlist under a new id and re-point its videos to it."""
        dao = self.store.local_playlists
        created = 0
        total = len(playlists)

        with self._progress_bar(total, "Restoring playlists", "playlist") as pbar:
            for i, entry in enumerate(playlists):
                if self.progress_callback:
                    self.progress_callback(i + 1, total, "playlists")

                pbar.set_postfix_str(entry.playlist.name)

                # id 0 lets the store assign a fresh id
                header = entry.playlist.model_copy(update={"id": 0})
                try:
                    playlist_id = self._insert(dao.create_playlist, header, "playlist")
                except StoreWriteError as e:
                    logger.warning(str(e))
                    pbar.update(1)
                    continue

                created += 1
                for video in entry.videos:
                    item = video.model_copy(update={"playlist_id": playlist_id, "id": 0})
                    try:
                        self._insert(dao.add_playlist_video, item, "playlist video")
                    except StoreWriteError as e:
                        logger.warning(str(e))

                logger.debug(f"Restored playlist {entry.playlist.name!r} as {playlist_id}")
                pbar.update(1)

        logger.info(f"Restored {created}/{total} playlists")
        return created

    def _progress_bar(self, total: int, desc: str, unit: str) -> tqdm:
        return tqdm(total=total, desc=desc, unit=unit, disable=not self.config.show_progress)

    @staticmethod
    def _insert(insert: Callable[[T], object], record: T, label: str):
        try:
            return insert(record)
        except Exception as e:
            raise StoreWriteError(f"Failed to restore {label} record: {e}") from e

    @staticmethod
    def _open(opener: SourceOpener) -> BinaryIO:
        try:
            stream = opener()
        except OSError as e:
            raise UnreadableSourceError(f"Failed to open backup: {e}") from e
        if stream is None:
            raise UnreadableSourceError("Backup source returned no stream")
        return stream
