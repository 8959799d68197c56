"""In-memory store implementations.

Used by tests and by callers that stage data before handing it to the real
database. Inserts replace records with the same primary key, matching the
conflict strategy of the application database.
"""

from pathlib import Path
from typing import AbstractSet, Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar

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
from ..models.preference import PreferenceType
from ..util.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class StoreClosedError(RuntimeError):
    """The store handle was used after it was closed."""
    pass


class InMemoryDao(Generic[T]):
    """Record accessor keyed by a primary key."""

    def __init__(self, store: "InMemoryEntityStore", key: Callable[[T], Any]):
        self._store = store
        self._key = key
        self._records: Dict[Any, T] = {}

    def get_all(self) -> List[T]:
        self._store.ensure_open()
        return list(self._records.values())

    def insert(self, record: T) -> None:
        self._store.ensure_open()
        self._records[self._key(record)] = record

    def insert_all(self, records: List[T]) -> None:
        for record in records:
            self.insert(record)


class InMemoryPlaylistDao:
    """Local playlists with auto-assigned ids."""

    def __init__(self, store: "InMemoryEntityStore"):
        self._store = store
        self._playlists: Dict[int, LocalPlaylist] = {}
        self._items: List[LocalPlaylistItem] = []
        self._next_playlist_id = 1
        self._next_item_id = 1

    def get_all(self) -> List[LocalPlaylistWithVideos]:
        self._store.ensure_open()
        return [
            LocalPlaylistWithVideos(
                playlist=playlist,
                videos=[item for item in self._items if item.playlist_id == playlist_id],
            )
            for playlist_id, playlist in self._playlists.items()
        ]

    def create_playlist(self, playlist: LocalPlaylist) -> int:
        self._store.ensure_open()
        playlist_id = playlist.id
        if playlist_id == 0:
            playlist_id = self._next_playlist_id
        self._next_playlist_id = max(self._next_playlist_id, playlist_id + 1)
        self._playlists[playlist_id] = playlist.model_copy(update={"id": playlist_id})
        return playlist_id

    def add_playlist_video(self, item: LocalPlaylistItem) -> None:
        self._store.ensure_open()
        if item.playlist_id not in self._playlists:
            raise KeyError(f"No playlist with id {item.playlist_id}")
        item_id = item.id
        if item_id == 0:
            item_id = self._next_item_id
        self._next_item_id = max(self._next_item_id, item_id + 1)
        self._items = [existing for existing in self._items if existing.id != item_id]
        self._items.append(item.model_copy(update={"id": item_id}))


class InMemoryEntityStore:
    """Entity store kept in memory, optionally tied to a database file path."""

    def __init__(self, database_path: Optional[Path] = None):
        self._database_path = Path(database_path) if database_path else Path("tubevault.db")
        self.is_open = True
        self.reinitialize_count = 0

        self.subscriptions: InMemoryDao[LocalSubscription] = InMemoryDao(self, lambda s: s.channel_id)
        self.local_playlists = InMemoryPlaylistDao(self)
        self.watch_history: InMemoryDao[WatchHistoryItem] = InMemoryDao(self, lambda h: h.video_id)
        self.watch_positions: InMemoryDao[WatchPosition] = InMemoryDao(self, lambda p: p.video_id)
        self.search_history: InMemoryDao[SearchHistoryItem] = InMemoryDao(self, lambda s: s.query)
        self.playlist_bookmarks: InMemoryDao[PlaylistBookmark] = InMemoryDao(self, lambda b: b.playlist_id)
        self.groups: InMemoryDao[SubscriptionGroup] = InMemoryDao(self, lambda g: g.name)

    @property
    def database_path(self) -> Path:
        return self._database_path

    def ensure_open(self) -> None:
        if not self.is_open:
            raise StoreClosedError("Store handle is closed")

    def close(self) -> None:
        logger.debug(f"Closing store {self._database_path}")
        self.is_open = False

    def reinitialize(self) -> None:
        logger.debug(f"Reinitializing store {self._database_path}")
        self.is_open = True
        self.reinitialize_count += 1


class InMemoryPreferenceStore:
    """Typed preference store that remembers the native type of each key.

    Reading a key through a getter of another type raises ``TypeError``,
    like a typed preference backend does.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Tuple[PreferenceType, Any]] = {}

    def _get(self, key: str, expected: PreferenceType, default: Any) -> Any:
        if key not in self._values:
            return default
        stored_type, value = self._values[key]
        if stored_type is not expected:
            raise TypeError(f"Preference {key!r} is a {stored_type.value}, not a {expected.value}")
        return value

    def type_of(self, key: str) -> Optional[PreferenceType]:
        entry = self._values.get(key)
        return entry[0] if entry else None

    def get_boolean(self, key: str, default: bool = False) -> bool:
        return self._get(key, PreferenceType.BOOLEAN, default)

    def put_boolean(self, key: str, value: bool) -> None:
        self._values[key] = (PreferenceType.BOOLEAN, bool(value))

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._get(key, PreferenceType.STRING, default)

    def put_string(self, key: str, value: str) -> None:
        self._values[key] = (PreferenceType.STRING, str(value))

    def get_int(self, key: str, default: int = 0) -> int:
        return self._get(key, PreferenceType.INT, default)

    def put_int(self, key: str, value: int) -> None:
        if not -2**31 <= value < 2**31:
            raise OverflowError(f"{value} does not fit in a 32-bit preference")
        self._values[key] = (PreferenceType.INT, int(value))

    def get_long(self, key: str, default: int = 0) -> int:
        return self._get(key, PreferenceType.LONG, default)

    def put_long(self, key: str, value: int) -> None:
        self._values[key] = (PreferenceType.LONG, int(value))

    def get_float(self, key: str, default: float = 0.0) -> float:
        return self._get(key, PreferenceType.FLOAT, default)

    def put_float(self, key: str, value: float) -> None:
        self._values[key] = (PreferenceType.FLOAT, float(value))

    def get_string_set(
        self, key: str, default: Optional[AbstractSet[str]] = None
    ) -> Optional[AbstractSet[str]]:
        return self._get(key, PreferenceType.STRING_SET, default)

    def put_string_set(self, key: str, value: AbstractSet[str]) -> None:
        self._values[key] = (PreferenceType.STRING_SET, frozenset(value))

    def get_all(self) -> Dict[str, Any]:
        return {key: value for key, (_, value) in self._values.items()}

    def clear(self) -> None:
        self._values.clear()


class RecordingScheduler:
    """Notification scheduler that only records enqueue requests."""

    def __init__(self) -> None:
        self.calls: List[bool] = []

    def enqueue_work(self, replace_existing: bool = True) -> None:
        self.calls.append(replace_existing)
