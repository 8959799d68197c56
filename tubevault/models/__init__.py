"""Data models for backups."""

from .document import (
    BackupDocument,
    LocalPlaylist,
    LocalPlaylistItem,
    LocalPlaylistWithVideos,
    LocalSubscription,
    PlaylistBookmark,
    PreferenceEntry,
    PreferenceValue,
    SearchHistoryItem,
    SubscriptionGroup,
    WatchHistoryItem,
    WatchPosition,
)
from .options import BackupOptions, BackupType, RestoreResult, RestoreStats

__all__ = [
    # document
    "BackupDocument",
    "LocalPlaylist",
    "LocalPlaylistItem",
    "LocalPlaylistWithVideos",
    "LocalSubscription",
    "PlaylistBookmark",
    "PreferenceEntry",
    "PreferenceValue",
    "SearchHistoryItem",
    "SubscriptionGroup",
    "WatchHistoryItem",
    "WatchPosition",
    # options
    "BackupOptions",
    "BackupType",
    "RestoreResult",
    "RestoreStats",
]
