"""Shared fixtures for backup and restore tests."""

from datetime import date

import pytest

from tubevault.models import (
    LocalPlaylist,
    LocalPlaylistItem,
    LocalSubscription,
    PlaylistBookmark,
    SearchHistoryItem,
    SubscriptionGroup,
    WatchHistoryItem,
    WatchPosition,
)
from tubevault.store import InMemoryEntityStore, InMemoryPreferenceStore, RecordingScheduler


@pytest.fixture
def store(tmp_path):
    return InMemoryEntityStore(tmp_path / "db" / "tubevault.db")


@pytest.fixture
def prefs():
    return InMemoryPreferenceStore()


@pytest.fixture
def scheduler():
    return RecordingScheduler()


@pytest.fixture
def populated_store(store):
    """Store holding a few records of every category."""
    store.subscriptions.insert_all([
        LocalSubscription(channel_id="UC_alpha", name="Alpha", verified=True),
        LocalSubscription(channel_id="UC_beta", name="Beta"),
    ])

    playlist_id = store.local_playlists.create_playlist(LocalPlaylist(name="Favourites"))
    for video_id in ("vid1", "vid2", "vid3"):
        store.local_playlists.add_playlist_video(
            LocalPlaylistItem(playlist_id=playlist_id, video_id=video_id, title=f"Video {video_id}")
        )

    store.watch_history.insert_all([
        WatchHistoryItem(video_id="vid1", title="Video vid1", upload_date=date(2024, 1, 2), duration=300),
        WatchHistoryItem(video_id="vid9", title="Video vid9", is_short=True, watched_at=1700000000000),
    ])
    store.watch_positions.insert_all([
        WatchPosition(video_id="vid1", position=15000),
        WatchPosition(video_id="vid2", position=42000),
    ])
    store.search_history.insert_all([
        SearchHistoryItem(query="lofi"),
        SearchHistoryItem(query="python talks"),
    ])
    store.playlist_bookmarks.insert(
        PlaylistBookmark(playlist_id="PL_remote", playlist_name="Remote list", videos=12)
    )
    store.groups.insert(SubscriptionGroup(name="Music", channels=["UC_alpha"], index=0))

    return store


@pytest.fixture
def populated_prefs(prefs):
    prefs.put_boolean("sponsor_block_enabled", True)
    prefs.put_string("region", "DE")
    prefs.put_int("sponsor_color", -16711936)
    prefs.put_long("last_shown_info_message_version_code", 57)
    prefs.put_float("playback_speed", 1.5)
    prefs.put_string_set("home_tab_content", {"trending", "bookmarks"})
    prefs.put_string("image_cache_size", "128")
    return prefs
