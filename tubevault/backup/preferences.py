"""Conversion of preferences between the live store and backup documents.

Backups carry preference values as bare JSON primitives, so the type a key
has in the preference store is lost on export. Restoring resolves the
native type again from the key and the shape of the value:

1. keys in ``FORCE_STRING_KEYS`` are always stored as strings
2. JSON strings stay strings
3. other values are tried as boolean, 32-bit int, 64-bit long, then float
4. plain ints become longs, except for ``start_fragment`` and ``*_color*``
   keys; strings of ``STRING_SET_KEYS`` are split into sets
"""

import json
from typing import Any, Iterable, List, Optional

from ..models.document import PreferenceEntry, PreferenceValue
from ..models.preference import NativePreference, PreferenceType
from ..store.base import NotificationScheduler, PreferenceStore
from ..util.logging import get_logger
from .errors import PartialTypeMismatchError
from .preference_keys import FORCE_STRING_KEYS, IGNORED_KEYS, STRING_SET_KEYS, is_int_key

logger = get_logger(__name__)

INT_MIN, INT_MAX = -2**31, 2**31 - 1
LONG_MIN, LONG_MAX = -2**63, 2**63 - 1

SET_SEPARATOR = ","


def encode_preference(value: Any) -> PreferenceValue:
    """Convert a native preference value to its JSON primitive."""
    if isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (set, frozenset)):
        return SET_SEPARATOR.join(sorted(value))
    raise TypeError(f"Unsupported preference value type: {type(value).__name__}")


def export_preferences(prefs: PreferenceStore) -> List[PreferenceEntry]:
    """Read every preference from the store as backup entries."""
    entries = []
    for key, value in sorted(prefs.get_all().items()):
        try:
            entries.append(PreferenceEntry(key=key, value=encode_preference(value)))
        except TypeError as e:
            logger.warning(f"Skipping preference {key}: {e}")
    return entries


def _wire_text(value: PreferenceValue) -> str:
    """Text of a JSON primitive as it appears in the document."""
    if isinstance(value, str):
        return value
    return json.dumps(value)


def decode_preference(key: Optional[str], value: Optional[PreferenceValue]) -> Optional[NativePreference]:
    """Resolve the native type and value of a backed-up preference.

    Returns None for entries that must not be restored (no key, or a key
    on the ignore list).

    Raises:
        PartialTypeMismatchError: if the value cannot be coerced
    """
    if key is None or key in IGNORED_KEYS:
        return None

    if value is None:
        raise PartialTypeMismatchError(key, value, "no value")

    if key in FORCE_STRING_KEYS:
        return NativePreference(key, PreferenceType.STRING, _wire_text(value))

    if isinstance(value, str):
        if key in STRING_SET_KEYS:
            return NativePreference(key, PreferenceType.STRING_SET, frozenset(value.split(SET_SEPARATOR)))
        return NativePreference(key, PreferenceType.STRING, value)

    if isinstance(value, bool):
        return NativePreference(key, PreferenceType.BOOLEAN, value)

    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            if is_int_key(key):
                return NativePreference(key, PreferenceType.INT, value)
            return NativePreference(key, PreferenceType.LONG, value)
        if LONG_MIN <= value <= LONG_MAX:
            return NativePreference(key, PreferenceType.LONG, value)
        try:
            return NativePreference(key, PreferenceType.FLOAT, float(value))
        except OverflowError as e:
            raise PartialTypeMismatchError(key, value, str(e)) from e

    if isinstance(value, float):
        return NativePreference(key, PreferenceType.FLOAT, value)

    raise PartialTypeMismatchError(key, value, f"unsupported type {type(value).__name__}")


def apply_preference(prefs: PreferenceStore, preference: NativePreference) -> None:
    """Write a resolved preference with the setter of its native type."""
    key, value = preference.key, preference.value

    if preference.type is PreferenceType.BOOLEAN:
        prefs.put_boolean(key, value)
    elif preference.type is PreferenceType.STRING:
        prefs.put_string(key, value)
    elif preference.type is PreferenceType.INT:
        prefs.put_int(key, value)
    elif preference.type is PreferenceType.LONG:
        prefs.put_long(key, value)
    elif preference.type is PreferenceType.FLOAT:
        prefs.put_float(key, value)
    elif preference.type is PreferenceType.STRING_SET:
        prefs.put_string_set(key, value)


def restore_preferences(
    prefs: PreferenceStore,
    entries: Iterable[PreferenceEntry],
    scheduler: Optional[NotificationScheduler] = None
) -> int:
    """Replace all preferences with the ones from a backup.

    The store is cleared first, so ignored keys fall back to their
    defaults. A key that fails is logged and skipped; keys already written
    stay written.

    Returns:
        Number of preferences written
    """
    prefs.clear()
    restored = 0

    for entry in entries:
        try:
            preference = decode_preference(entry.key, entry.value)
            if preference is None:
                logger.debug(f"Not restoring preference {entry.key}")
                continue
            apply_preference(prefs, preference)
            restored += 1
        except PartialTypeMismatchError as e:
            logger.warning(str(e))
        except Exception as e:
            logger.warning(f"Failed to restore preference {entry.key}: {e}")

    logger.info(f"Restored {restored} preferences")

    # Notification settings may have changed
    if scheduler is not None:
        scheduler.enqueue_work(replace_existing=True)

    return restored
