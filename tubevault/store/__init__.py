"""Store contracts and in-memory implementations."""

from .base import EntityStore, NotificationScheduler, PlaylistDao, PreferenceStore, RecordDao
from .memory import (
    InMemoryDao,
    InMemoryEntityStore,
    InMemoryPlaylistDao,
    InMemoryPreferenceStore,
    RecordingScheduler,
    StoreClosedError,
)

__all__ = [
    # base
    "EntityStore",
    "NotificationScheduler",
    "PlaylistDao",
    "PreferenceStore",
    "RecordDao",
    # memory
    "InMemoryDao",
    "InMemoryEntityStore",
    "InMemoryPlaylistDao",
    "InMemoryPreferenceStore",
    "RecordingScheduler",
    "StoreClosedError",
]
