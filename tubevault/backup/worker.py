"""Background execution of backup and restore operations.

Exports and restores are long blocking I/O. The worker runs them on a
single dedicated thread, which also keeps two operations from touching the
store at the same time, and hands results back as futures. Callbacks run on
the worker thread; UI callers marshal them to their own thread.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

from ..config import TubeVaultConfig, get_config
from ..models.options import BackupOptions, BackupType, RestoreResult
from ..store.base import EntityStore, NotificationScheduler, PreferenceStore
from ..util.logging import get_logger
from .errors import BackupError, ExportError
from .exporter import BackupExporter
from .restore import BackupSource, ProgressCallback, RestoreEngine
from .storage import BackupStorage

logger = get_logger(__name__)

SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[BaseException], None]


class BackupWorker:
    """Runs exports and restores of one store on a background thread."""

    def __init__(
        self,
        store: EntityStore,
        prefs: PreferenceStore,
        scheduler: Optional[NotificationScheduler] = None,
        config: Optional[TubeVaultConfig] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self.config = config or get_config()
        self.exporter = BackupExporter(store, prefs, self.config.backup)
        self.engine = RestoreEngine(
            store,
            prefs,
            scheduler=scheduler,
            config=self.config.restore,
            progress_callback=progress_callback,
        )
        self.storage = BackupStorage(self.config.storage.backup_root)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tubevault-io")

    def __enter__(self) -> "BackupWorker":
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def submit_backup(
        self,
        options: Optional[BackupOptions] = None,
        backup_type: BackupType = BackupType.JSON,
        name: str = "tubevault-backup",
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None
    ) -> "Future[Path]":
        """Write a backup into the storage directory and prune old ones.

        The future resolves to the path of the new backup file.
        """
        file_name = self.storage.export_file_name(
            name, backup_type, include_timestamp=self.config.storage.include_timestamp
        )
        return self._submit(self._backup_to_storage, file_name, backup_type, options,
                            on_success=on_success, on_failure=on_failure)

    def submit_export(
        self,
        open_destination: Callable[[], BinaryIO],
        options: Optional[BackupOptions] = None,
        backup_type: BackupType = BackupType.JSON,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None
    ) -> "Future[None]":
        """Write a backup to a destination chosen by the caller."""
        return self._submit(self._export, open_destination, backup_type, options,
                            on_success=on_success, on_failure=on_failure)

    def submit_restore(
        self,
        source: BackupSource,
        options: Optional[BackupOptions] = None,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None
    ) -> "Future[RestoreResult]":
        """Restore a backup of either type."""
        return self._submit(self.engine.restore, source, options,
                            on_success=on_success, on_failure=on_failure)

    def _export(
        self,
        open_destination: Callable[[], BinaryIO],
        backup_type: BackupType,
        options: Optional[BackupOptions]
    ) -> None:
        try:
            destination = open_destination()
        except OSError as e:
            raise ExportError(f"Failed to open backup destination: {e}") from e

        with destination:
            if backup_type is BackupType.DATABASE:
                self.exporter.export_database(destination)
            else:
                self.exporter.create_selective_backup(destination, options)

    def _backup_to_storage(
        self, file_name: str, backup_type: BackupType, options: Optional[BackupOptions]
    ) -> Path:
        path = self.storage.get_backup_path(file_name)

        try:
            self._export(lambda: self.storage.open_write(file_name), backup_type, options)
        except Exception:
            # Never leave a half-written backup behind
            path.unlink(missing_ok=True)
            raise

        logger.info(f"Backup written to {path}")
        self.storage.prune(self.config.storage.max_backup_files)
        return path

    def _submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        on_success: Optional[SuccessCallback] = None,
        on_failure: Optional[FailureCallback] = None
    ) -> Future:
        future = self._executor.submit(fn, *args)

        def _done(done: Future) -> None:
            error = done.exception()
            if error is not None:
                if isinstance(error, BackupError):
                    logger.error(f"{fn.__name__} failed: {error}")
                else:
                    logger.exception(f"{fn.__name__} failed unexpectedly", exc_info=error)
                if on_failure:
                    on_failure(error)
            elif on_success:
                on_success(done.result())

        future.add_done_callback(_done)
        return future
