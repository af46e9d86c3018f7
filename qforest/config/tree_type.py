# qforest/config/tree_type.py
from __future__ import annotations

from enum import IntEnum
from typing import List, Optional, Tuple


class TreeType(IntEnum):
    """
    Closed set of forest types, keyed by the numeric `--treetype` code.

    The same table drives option coercion, the instrumental-only validation
    rules and the help listing.
    """

    QUANTILE = 11
    INSTRUMENTAL = 15

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_code(cls, code: int) -> Optional["TreeType"]:
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def describe(cls) -> List[Tuple[int, str]]:
        return [(member.value, member.label) for member in cls]

    @classmethod
    def codes_text(cls) -> str:
        return ", ".join(f"{code} ({label})" for code, label in cls.describe())
