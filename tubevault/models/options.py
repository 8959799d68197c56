"""Backup selection options and restore results."""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class BackupType(str, Enum):
    """Representation a backup is stored in."""

    JSON = "json"          # Portable structured document
    DATABASE = "database"  # Raw database file

    @property
    def file_extension(self) -> str:
        return "json" if self is BackupType.JSON else "db"


class BackupOptions(BaseModel):
    """Categories selected for a backup or restore."""

    include_subscriptions: bool = Field(default=True, description="Channel subscriptions")
    include_playlists: bool = Field(default=True, description="Local playlists and their videos")
    include_watch_history: bool = Field(default=True, description="Watch history")
    include_watch_positions: bool = Field(default=True, description="Saved playback positions")
    include_search_history: bool = Field(default=False, description="Search history")
    include_playlist_bookmarks: bool = Field(default=True, description="Bookmarked playlists")
    include_preferences: bool = Field(default=True, description="Application preferences")
    include_groups: bool = Field(default=True, description="Channel groups")

    @classmethod
    def everything(cls) -> "BackupOptions":
        """Options with every category selected."""
        return cls(**{name: True for name in cls.model_fields})

    @classmethod
    def nothing(cls) -> "BackupOptions":
        """Options with no category selected."""
        return cls(**{name: False for name in cls.model_fields})


@dataclass
class RestoreStats:
    """Counts of records merged by one structured restore."""

    subscriptions_imported: int = 0
    playlists_imported: int = 0
    watch_history_imported: int = 0
    watch_positions_imported: int = 0
    search_history_imported: int = 0
    playlist_bookmarks_imported: int = 0
    groups_imported: int = 0
    preferences_restored: bool = False

    @property
    def total_items_imported(self) -> int:
        return (
            self.subscriptions_imported
            + self.playlists_imported
            + self.watch_history_imported
            + self.watch_positions_imported
            + self.search_history_imported
            + self.playlist_bookmarks_imported
            + self.groups_imported
        )

    def as_dict(self) -> Dict[str, int]:
        return {
            "subscriptions": self.subscriptions_imported,
            "playlists": self.playlists_imported,
            "watch_history": self.watch_history_imported,
            "watch_positions": self.watch_positions_imported,
            "search_history": self.search_history_imported,
            "playlist_bookmarks": self.playlist_bookmarks_imported,
            "groups": self.groups_imported,
        }


@dataclass
class RestoreResult:
    """Outcome of restoring a backup of either type.

    A raw database restore carries no stats and leaves the store closed
    until the application reinitializes it.
    """

    backup_type: BackupType
    stats: Optional[RestoreStats] = None

    @property
    def requires_restart(self) -> bool:
        return self.backup_type is BackupType.DATABASE
