"""Track format templates (validation + expansion).

Templates are printf-like strings used for the track rows, the status line
and the terminal window title:

    %%          literal percent sign
    %=          split point; text after it is right-aligned to the width
    %[-][0][width]KEY

    a artist   l album   D disc number   n track number   t title
    g genre    y year    d duration      f file basename  F full filename

``-`` left-aligns inside ``width``, ``0`` zero-pads numeric fields. Only one
``%=`` may appear in a template. Text fields longer than ``width`` are cut.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from .track import Track

__all__ = ["FORMAT_KEYS", "FormatError", "parse_format", "format_valid", "format_track"]


def _duration(seconds: Optional[int]) -> str:
    if seconds is None or seconds < 0:
        return ""
    hours, rem = divmod(seconds, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


# key -> (value getter, numeric)
FORMAT_KEYS: Dict[str, tuple[Callable[[Track], object], bool]] = {
    "a": (lambda t: t.artist, False),
    "l": (lambda t: t.album, False),
    "D": (lambda t: t.discnumber, True),
    "n": (lambda t: t.tracknumber, True),
    "t": (lambda t: t.title, False),
    "g": (lambda t: t.genre, False),
    "y": (lambda t: t.date, True),
    "d": (lambda t: _duration(t.duration), False),
    "f": (lambda t: os.path.basename(t.filename), False),
    "F": (lambda t: t.filename, False),
}


class FormatError(ValueError):
    """Raised for a template that does not follow the grammar."""


@dataclass(frozen=True)
class _Field:
    key: str
    left: bool = False
    zero: bool = False
    width: int = 0


class _Align:
    pass


_ALIGN = _Align()
_Token = Union[str, _Field, _Align]


def parse_format(template: str) -> List[_Token]:
    tokens: List[_Token] = []
    text: List[str] = []
    seen_align = False
    i = 0
    n = len(template)
    while i < n:
        ch = template[i]
        i += 1
        if ch != "%":
            text.append(ch)
            continue
        if i >= n:
            raise FormatError("dangling '%' at end of format")
        if template[i] == "%":
            text.append("%")
            i += 1
            continue
        if text:
            tokens.append("".join(text))
            text = []
        if template[i] == "=":
            if seen_align:
                raise FormatError("only one '%=' allowed")
            seen_align = True
            tokens.append(_ALIGN)
            i += 1
            continue
        left = zero = False
        if template[i] == "-":
            left = True
            i += 1
        if i < n and template[i] == "0":
            zero = True
            i += 1
        start = i
        while i < n and "0" <= template[i] <= "9":
            i += 1
        width = int(template[start:i]) if i > start else 0
        if i >= n:
            raise FormatError("format specifier missing key")
        key = template[i]
        if key not in FORMAT_KEYS:
            raise FormatError(f"unknown format key '{key}'")
        i += 1
        tokens.append(_Field(key, left, zero, width))
    if text:
        tokens.append("".join(text))
    return tokens


def format_valid(template: str) -> bool:
    try:
        parse_format(template)
    except FormatError:
        return False
    return True


def _expand(field: _Field, track: Track) -> str:
    getter, numeric = FORMAT_KEYS[field.key]
    value = getter(track)
    if value is None:
        return " " * field.width
    text = str(value)
    if numeric and field.zero and not field.left:
        return text.rjust(field.width, "0")
    if not numeric and field.width and len(text) > field.width:
        text = text[: field.width]
    return text.ljust(field.width) if field.left else text.rjust(field.width)


def format_track(template: str, track: Track, width: Optional[int] = None) -> str:
    """Expand ``template`` for ``track``.

    With ``width`` set, the part after ``%=`` is pushed to the right edge and
    the left part is cut if both do not fit. Raises ``FormatError`` for an
    invalid template.
    """
    left: List[str] = []
    right: List[str] = []
    out = left
    for tok in parse_format(template):
        if tok is _ALIGN:
            out = right
        elif isinstance(tok, _Field):
            out.append(_expand(tok, track))
        else:
            out.append(tok)
    lhs = "".join(left)
    rhs = "".join(right)
    if width is None:
        return lhs + rhs
    room = width - len(rhs)
    if room <= 0:
        return rhs[-width:] if width > 0 else ""
    return lhs[:room].ljust(room) + rhs
