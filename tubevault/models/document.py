"""Structured backup document model.

The JSON wire format uses camelCase field names; Python code uses the
snake_case attribute names. A category field that is ``None`` was not
requested when the backup was made, while an empty list means it was
requested but held no data.
"""

from datetime import date
from typing import List, Optional, Union

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Wire shape of a preference value; no static type per key
PreferenceValue = Union[bool, int, float, str]


class WireModel(BaseModel):
    """Base for models exchanged through the JSON backup format."""

    class Config:
        """Pydantic configuration."""

        alias_generator = to_camel
        populate_by_name = True


class LocalSubscription(WireModel):
    """Channel subscription kept on the device."""

    channel_id: str = Field(description="Channel identifier")
    name: Optional[str] = Field(default=None, description="Channel name")
    avatar: Optional[str] = Field(default=None, description="Channel avatar URL")
    verified: bool = Field(default=False, description="Channel is verified")


class LocalPlaylist(WireModel):
    """Header row of a local playlist."""

    id: int = Field(default=0, description="Playlist id assigned by the store")
    name: str = Field(default="", description="Playlist name")
    thumbnail_url: str = Field(default="", description="Playlist thumbnail URL")


class LocalPlaylistItem(WireModel):
    """Video row belonging to a local playlist."""

    id: int = Field(default=0, description="Row id assigned by the store")
    playlist_id: int = Field(default=0, description="Id of the owning playlist")
    video_id: str = Field(description="Video identifier")
    title: Optional[str] = None
    upload_date: Optional[date] = None
    uploader: Optional[str] = None
    uploader_url: Optional[str] = None
    uploader_avatar: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None


class LocalPlaylistWithVideos(WireModel):
    """Playlist header together with its ordered videos."""

    playlist: LocalPlaylist = Field(default_factory=LocalPlaylist)
    videos: List[LocalPlaylistItem] = Field(default_factory=list)


class WatchHistoryItem(WireModel):
    """Entry of the watch history."""

    video_id: str = Field(default="", description="Video identifier")
    title: Optional[str] = None
    upload_date: Optional[date] = None
    uploader: Optional[str] = None
    uploader_url: Optional[str] = None
    uploader_avatar: Optional[str] = None
    thumbnail_url: Optional[str] = None
    duration: Optional[int] = None
    is_short: bool = False
    watched_at: int = Field(default=0, description="Unix time in milliseconds")
    position: int = Field(default=0, description="Last playback position in milliseconds")


class WatchPosition(WireModel):
    """Saved playback position of a video."""

    video_id: str = Field(default="", description="Video identifier")
    position: int = Field(default=0, description="Playback position in milliseconds")


class SearchHistoryItem(WireModel):
    """Past search query."""

    query: str = Field(default="", description="Search query")


class PlaylistBookmark(WireModel):
    """Bookmarked remote playlist."""

    playlist_id: str = Field(description="Remote playlist identifier")
    playlist_name: Optional[str] = None
    thumbnail_url: Optional[str] = None
    uploader: Optional[str] = None
    uploader_url: Optional[str] = None
    uploader_avatar: Optional[str] = None
    videos: int = Field(default=0, description="Number of videos in the playlist")


class SubscriptionGroup(WireModel):
    """User-defined channel group."""

    name: str = Field(description="Group name")
    channels: List[str] = Field(default_factory=list, description="Channel ids in the group")
    index: int = Field(default=0, description="Display position")


class PreferenceEntry(WireModel):
    """Single preference as stored in a backup."""

    key: Optional[str] = Field(default=None, description="Preference key")
    value: Optional[PreferenceValue] = Field(default=None, description="Loosely typed value")


class BackupDocument(WireModel):
    """Top-level structured backup document."""

    watch_history: Optional[List[WatchHistoryItem]] = None
    watch_positions: Optional[List[WatchPosition]] = None
    search_history: Optional[List[SearchHistoryItem]] = None
    subscriptions: Optional[List[LocalSubscription]] = None
    local_playlists: Optional[List[LocalPlaylistWithVideos]] = None
    preferences: Optional[List[PreferenceEntry]] = None
    playlist_bookmarks: Optional[List[PlaylistBookmark]] = None
    groups: Optional[List[SubscriptionGroup]] = None

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize using the camelCase wire names."""
        return self.model_dump_json(by_alias=True, indent=indent)

    @classmethod
    def from_json(cls, data: Union[str, bytes]) -> "BackupDocument":
        """Parse a document; unknown top-level fields are ignored."""
        return cls.model_validate_json(data)
