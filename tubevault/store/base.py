"""Contracts of the stores a backup reads from and restores into.

The engine only talks to these interfaces; it never builds SQL or touches
the storage internals. Implementations are supplied by the application
(or by :mod:`tubevault.store.memory` in tests).
"""

from pathlib import Path
from typing import AbstractSet, Any, Dict, List, Optional, Protocol, TypeVar

from ..models.document import (
    LocalPlaylist,
    LocalPlaylistItem,
    LocalPlaylistWithVideos,
    LocalSubscription,
    PlaylistBookmark,
    SearchHistoryItem,
    SubscriptionGroup,
    WatchHistoryItem,
    WatchPosition,
)

T = TypeVar("T")


class RecordDao(Protocol[T]):
    """Accessor for one category of records."""

    def get_all(self) -> List[T]:
        ...

    def insert(self, record: T) -> None:
        ...

    def insert_all(self, records: List[T]) -> None:
        ...


class PlaylistDao(Protocol):
    """Accessor for local playlists and their videos."""

    def get_all(self) -> List[LocalPlaylistWithVideos]:
        ...

    def create_playlist(self, playlist: LocalPlaylist) -> int:
        """Insert a playlist header and return its id (id 0 asks for a new one)."""
        ...

    def add_playlist_video(self, item: LocalPlaylistItem) -> None:
        ...


class EntityStore(Protocol):
    """Handle on the live database and its per-category accessors."""

    subscriptions: RecordDao[LocalSubscription]
    local_playlists: PlaylistDao
    watch_history: RecordDao[WatchHistoryItem]
    watch_positions: RecordDao[WatchPosition]
    search_history: RecordDao[SearchHistoryItem]
    playlist_bookmarks: RecordDao[PlaylistBookmark]
    groups: RecordDao[SubscriptionGroup]

    @property
    def database_path(self) -> Path:
        """Canonical path of the database file."""
        ...

    def close(self) -> None:
        """Release the handle so the database file is not locked."""
        ...

    def reinitialize(self) -> None:
        """Reopen the database after its file was replaced."""
        ...


class PreferenceStore(Protocol):
    """Typed key-value preference store."""

    def get_boolean(self, key: str, default: bool = False) -> bool:
        ...

    def put_boolean(self, key: str, value: bool) -> None:
        ...

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        ...

    def put_string(self, key: str, value: str) -> None:
        ...

    def get_int(self, key: str, default: int = 0) -> int:
        ...

    def put_int(self, key: str, value: int) -> None:
        ...

    def get_long(self, key: str, default: int = 0) -> int:
        ...

    def put_long(self, key: str, value: int) -> None:
        ...

    def get_float(self, key: str, default: float = 0.0) -> float:
        ...

    def put_float(self, key: str, value: float) -> None:
        ...

    def get_string_set(self, key: str, default: Optional[AbstractSet[str]] = None) -> Optional[AbstractSet[str]]:
        ...

    def put_string_set(self, key: str, value: AbstractSet[str]) -> None:
        ...

    def get_all(self) -> Dict[str, Any]:
        """Every stored preference with its native value."""
        ...

    def clear(self) -> None:
        ...


class NotificationScheduler(Protocol):
    """Schedules the periodic background notification job."""

    def enqueue_work(self, replace_existing: bool = True) -> None:
        ...
