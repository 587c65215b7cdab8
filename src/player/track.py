"""Track metadata record shared by the formatter and the library view."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

__all__ = ["Track"]


@dataclass(frozen=True)
class Track:
    filename: str
    artist: Optional[str] = None
    album: Optional[str] = None
    title: Optional[str] = None
    tracknumber: Optional[int] = None
    discnumber: Optional[int] = None
    date: Optional[int] = None
    genre: Optional[str] = None
    duration: Optional[int] = None  # seconds
