"""Native preference types."""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union


class PreferenceType(str, Enum):
    """Type a preference has inside the live preference store."""

    BOOLEAN = "boolean"
    STRING = "string"
    INT = "int"        # 32-bit
    LONG = "long"      # 64-bit
    FLOAT = "float"
    STRING_SET = "string_set"


NativeValue = Union[bool, str, int, float, FrozenSet[str]]


@dataclass(frozen=True)
class NativePreference:
    """A preference value resolved to the type it is stored with."""

    key: str
    type: PreferenceType
    value: NativeValue
