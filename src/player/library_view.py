"""Sorted library view.

Holds the tracks shown in the library window together with the sort
specification that orders them. A specification is a whitespace separated
list of keys from ``SORT_KEYS``; earlier keys take precedence.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional

from .sorting import MultiColumnSorter, SortKey
from .track import Track

__all__ = ["SORT_KEYS", "DEFAULT_SORT", "LibraryView", "parse_sort"]

_log = logging.getLogger(__name__)

SORT_KEYS: Dict[str, Callable[[Track], object]] = {
    "artist": lambda t: t.artist,
    "album": lambda t: t.album,
    "title": lambda t: t.title,
    "tracknumber": lambda t: t.tracknumber,
    "discnumber": lambda t: t.discnumber,
    "date": lambda t: t.date,
    "genre": lambda t: t.genre,
    "filename": lambda t: t.filename,
    "duration": lambda t: t.duration,
}

DEFAULT_SORT = "artist album discnumber tracknumber title filename"


def parse_sort(spec: str) -> List[str]:
    """Split ``spec`` into keys, raising ``ValueError`` on an unknown key."""
    keys = spec.split()
    for key in keys:
        if key not in SORT_KEYS:
            raise ValueError(f"invalid sort key '{key}'")
    return keys


class LibraryView:
    def __init__(
        self,
        tracks: Iterable[Track] = (),
        *,
        sort: str = DEFAULT_SORT,
        on_error: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._keys = parse_sort(sort)
        self._tracks: List[Track] = []
        self._on_error = on_error
        self.set_tracks(tracks)

    @property
    def sort_string(self) -> str:
        return " ".join(self._keys)

    @property
    def sort_keys(self) -> List[str]:
        return list(self._keys)

    @property
    def tracks(self) -> List[Track]:
        return list(self._tracks)

    def set_tracks(self, tracks: Iterable[Track]) -> None:
        self._tracks = self._sorted(tracks)

    def _sorted(self, tracks: Iterable[Track]) -> List[Track]:
        sorter = MultiColumnSorter(tracks)
        return sorter.sort([SortKey(SORT_KEYS[k]) for k in self._keys])

    def set_sort(self, spec: str, resort: bool = True) -> bool:
        """Replace the sort specification; unknown keys keep the old one."""
        try:
            keys = parse_sort(spec)
        except ValueError as exc:
            _log.info("rejected sort %r: %s", spec, exc)
            if self._on_error is not None:
                self._on_error(str(exc))
            return False
        self._keys = keys
        if resort:
            self._tracks = self._sorted(self._tracks)
        return True
