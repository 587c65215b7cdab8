"""Player-side state owners reached through the option registry.

These modules stay free of any terminal or audio dependency so the option
layer can be exercised headless.
"""

from .track import Track  # noqa: F401
from .colors import COLOR_NAMES, ColorSlot, ColorTable, ColorTableKind  # noqa: F401
from .output import OutputPlugin, Player  # noqa: F401
from .library_view import LibraryView, SORT_KEYS  # noqa: F401

__all__ = [
    "Track",
    "COLOR_NAMES",
    "ColorSlot",
    "ColorTable",
    "ColorTableKind",
    "OutputPlugin",
    "Player",
    "LibraryView",
    "SORT_KEYS",
]
