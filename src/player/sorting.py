"""Stable multi-key sorting for track lists.

Keys are applied from lowest to highest precedence so each pass keeps the
order established by the previous one. Missing values (``None``) sort before
any present value, and strings compare case-insensitively.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Iterable, List, Sequence, TypeVar

T = TypeVar("T")
KeyFunc = Callable[[T], object]


@dataclass(frozen=True)
class SortKey:
    key_func: KeyFunc
    ascending: bool = True


def _normalized(key_func: KeyFunc) -> Callable[[object], tuple]:
    def key(row):
        value = key_func(row)
        if value is None:
            return (0, "")
        if isinstance(value, str):
            return (1, value.casefold())
        return (1, value)

    return key


class MultiColumnSorter(Generic[T]):
    """Apply a priority list of ``SortKey`` to a snapshot of rows.

    Usage:
        sorter = MultiColumnSorter(tracks)
        ordered = sorter.sort([SortKey(lambda t: t.artist), SortKey(lambda t: t.title)])
    """

    def __init__(self, rows: Iterable[T]):
        self._rows: List[T] = list(rows)

    def sort(self, keys: Sequence[SortKey]) -> List[T]:
        result = list(self._rows)
        for sk in reversed(keys):
            result.sort(key=_normalized(sk.key_func), reverse=not sk.ascending)
        return result
