"""
TubeVault - backup and restore of a media client's local user data.

Moves a user's local state between the live store and two backup formats:
- Raw SQLite database file (byte-for-byte, same-application restores)
- Portable JSON document (selective export, additive merge on restore)
- Preferences with deterministic type coercion on import
"""

__version__ = "0.1.0"
__author__ = "TubeVault Contributors"
