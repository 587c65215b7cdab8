"""Terminal color tables for the player UI.

Each named UI element owns one background and one foreground color. Values
are curses color numbers in ``-1..255`` where ``-1`` keeps the terminal's
default color.

The option layer addresses a slot through a tagged ``ColorSlot`` naming the
table and the element index.

Addressing a slot outside the table is a defect in the caller, so it raises
instead of being reported to the user.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from config.settings import COLOR_MAX, COLOR_MIN

__all__ = [
    "COLOR_NAMES",
    "DEFAULT_COLORS",
    "NR_COLORS",
    "ColorTableKind",
    "ColorSlot",
    "ColorTable",
]

COLOR_NAMES: Tuple[str, ...] = (
    "row",
    "row_cur",
    "row_sel",
    "row_sel_cur",
    "row_active",
    "row_active_cur",
    "row_active_sel",
    "row_active_sel_cur",
    "separator",
    "title",
    "commandline",
    "statusline",
    "titleline",
    "browser_dir",
    "browser_file",
    "error",
    "info",
)

NR_COLORS = len(COLOR_NAMES)

# (bg, fg) per name; names missing here start at (-1, -1)
DEFAULT_COLORS: Dict[str, Tuple[int, int]] = {
    "row": (-1, -1),
    "row_cur": (-1, 3),
    "row_sel": (4, 7),
    "row_sel_cur": (4, 3),
    "row_active": (-1, 2),
    "row_active_cur": (-1, 3),
    "row_active_sel": (4, 2),
    "row_active_sel_cur": (4, 3),
    "separator": (-1, 4),
    "title": (4, 7),
    "commandline": (-1, -1),
    "statusline": (7, 0),
    "titleline": (4, 7),
    "browser_dir": (-1, 6),
    "browser_file": (-1, -1),
    "error": (-1, 1),
    "info": (-1, 3),
}


class ColorTableKind(str, Enum):
    BG = "bg"
    FG = "fg"


@dataclass(frozen=True)
class ColorSlot:
    """One addressable entry: which table and which element index."""

    table: ColorTableKind
    index: int


def is_valid_color(value: int) -> bool:
    return COLOR_MIN <= value <= COLOR_MAX


class ColorTable:
    """Parallel background/foreground tables indexed by UI element."""

    def __init__(self, names: Sequence[str] = COLOR_NAMES) -> None:
        self._names: Tuple[str, ...] = tuple(names)
        defaults = [DEFAULT_COLORS.get(n, (-1, -1)) for n in self._names]
        self._bg: List[int] = [bg for bg, _ in defaults]
        self._fg: List[int] = [fg for _, fg in defaults]

    @property
    def names(self) -> Tuple[str, ...]:
        return self._names

    def __len__(self) -> int:
        return len(self._names)

    def _table(self, slot: ColorSlot) -> List[int]:
        if slot.index < 0 or slot.index >= len(self._names):
            raise IndexError(f"color slot {slot.index} outside 0..{len(self._names) - 1}")
        return self._bg if slot.table is ColorTableKind.BG else self._fg

    def get(self, slot: ColorSlot) -> int:
        return self._table(slot)[slot.index]

    def set(self, slot: ColorSlot, value: int) -> None:
        if not is_valid_color(value):
            raise ValueError(f"color value must be {COLOR_MIN}..{COLOR_MAX}")
        self._table(slot)[slot.index] = value

    def slots(self) -> List[Tuple[str, ColorSlot, ColorSlot]]:
        """Return ``(name, bg_slot, fg_slot)`` for every element in table order."""
        return [
            (name, ColorSlot(ColorTableKind.BG, i), ColorSlot(ColorTableKind.FG, i))
            for i, name in enumerate(self._names)
        ]

    def pair(self, name: str) -> Tuple[int, int]:
        """``(bg, fg)`` for ``name``; what the renderer feeds to ``init_pair``."""
        i = self._names.index(name)
        return self._bg[i], self._fg[i]
