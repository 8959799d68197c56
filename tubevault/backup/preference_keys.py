"""Preference keys with special handling during backup restore."""

from typing import FrozenSet

# Player quality and resolution
DEFAULT_RESOLUTION = "default_res"
DEFAULT_RESOLUTION_MOBILE = "default_res_mobile"
PLAYER_AUDIO_QUALITY = "player_audio_quality"
PLAYER_AUDIO_QUALITY_MOBILE = "player_audio_quality_mobile"
BUFFERING_GOAL = "buffering_goal"
CAPTIONS_SIZE = "captions_size"
DOUBLE_TAP_TO_SEEK = "double_tap_seek"
AUTOPLAY_PLAYLISTS = "autoplay_playlists"

# Layout
GRID_COLUMNS_PORTRAIT = "grid"
GRID_COLUMNS_LANDSCAPE = "grid_landscape"
START_FRAGMENT = "start_fragment"
HOME_TAB_CONTENT = "home_tab_content"
SELECTED_FEED_FILTERS = "selected_feed_filters"

# Notifications
NOTIFICATION_ENABLED = "notification_toggle"
SHOW_STREAM_THUMBNAILS = "show_stream_thumbnails"
SHORTS_NOTIFICATIONS = "shorts_notifications"
CHECKING_FREQUENCY = "checking_frequency"
REQUIRED_NETWORK = "required_network"
IGNORED_NOTIFICATION_CHANNELS = "ignored_notification_channels"
NOTIFICATION_TIME_ENABLED = "notification_time"
NOTIFICATION_START_TIME = "notification_start_time"
NOTIFICATION_END_TIME = "notification_end_time"

# Storage and history
MAX_IMAGE_CACHE = "image_cache_size"
MAX_CONCURRENT_DOWNLOADS = "max_parallel_downloads"
WATCH_HISTORY_SIZE = "watch_history_size"
AUTO_BACKUP_MAX_FILES = "auto_backup_max_files"
AUTO_BACKUP_TYPE = "auto_backup_type"

# SponsorBlock
SB_USER_ID = "sb_user_id"
SPONSOR_BLOCK_CATEGORIES = (
    "sponsor",
    "selfpromo",
    "interaction",
    "intro",
    "outro",
    "filler",
    "music_offtopic",
    "preview",
    "hook",
)

# Suffix of the SponsorBlock segment color keys, stored as 32-bit integers
COLOR_KEY_MARKER = "_color"

# Keys whose values look numeric but are stored as strings
FORCE_STRING_KEYS: FrozenSet[str] = frozenset(
    [
        MAX_IMAGE_CACHE,
        MAX_CONCURRENT_DOWNLOADS,
        DEFAULT_RESOLUTION,
        DEFAULT_RESOLUTION_MOBILE,
        SB_USER_ID,
        AUTO_BACKUP_MAX_FILES,
        AUTO_BACKUP_TYPE,
        BUFFERING_GOAL,
        CAPTIONS_SIZE,
        CHECKING_FREQUENCY,
        WATCH_HISTORY_SIZE,
    ]
    + [f"{category}_category" for category in SPONSOR_BLOCK_CATEGORIES]
)

# Keys never restored from a backup; they fall back to their defaults
IGNORED_KEYS: FrozenSet[str] = frozenset(
    [
        GRID_COLUMNS_PORTRAIT,
        GRID_COLUMNS_LANDSCAPE,
        DEFAULT_RESOLUTION,
        DEFAULT_RESOLUTION_MOBILE,
        PLAYER_AUDIO_QUALITY,
        PLAYER_AUDIO_QUALITY_MOBILE,
        NOTIFICATION_ENABLED,
        SHOW_STREAM_THUMBNAILS,
        SHORTS_NOTIFICATIONS,
        CHECKING_FREQUENCY,
        REQUIRED_NETWORK,
        IGNORED_NOTIFICATION_CHANNELS,
        NOTIFICATION_TIME_ENABLED,
        NOTIFICATION_START_TIME,
        NOTIFICATION_END_TIME,
        MAX_CONCURRENT_DOWNLOADS,
        DOUBLE_TAP_TO_SEEK,
        AUTOPLAY_PLAYLISTS,
    ]
)

# String values of these keys hold a comma-separated set
STRING_SET_KEYS: FrozenSet[str] = frozenset([HOME_TAB_CONTENT, SELECTED_FEED_FILTERS])


def is_int_key(key: str) -> bool:
    """Keys whose integer values are stored as 32-bit ints instead of longs."""
    return key == START_FRAGMENT or COLOR_KEY_MARKER in key
