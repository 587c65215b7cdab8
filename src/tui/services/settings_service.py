"""Aggregate of the runtime state reachable through ``:set`` / ``:get``.

Every option accessor is built against one ``SettingsState`` instead of
module globals, so a test can construct an isolated player state, register
options against it and inspect the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from player.colors import COLOR_NAMES, ColorTable
from player.library_view import DEFAULT_SORT, LibraryView
from player.output import OutputPlugin, Player, default_plugins
from player.track import Track

from .event_bus import EventBus, PlayerEvent

__all__ = ["SettingsState"]


@dataclass
class SettingsState:
    """Owners of every option value.

    Attributes:
        colors: Background/foreground color tables for the UI elements.
        player: Output selection, buffer size and plugin options.
        view: Library view holding the sort specification.
        formats: Format template name -> current template. Filled by the
            lifecycle manager at startup and persisted at shutdown.
        status_display_program: External program notified on status change,
            ``None`` when unset.
    """

    colors: ColorTable
    player: Player
    view: LibraryView
    formats: Dict[str, str] = field(default_factory=dict)
    status_display_program: Optional[str] = None

    @classmethod
    def create(
        cls,
        bus: EventBus,
        *,
        color_names: Sequence[str] = COLOR_NAMES,
        plugins: Optional[Iterable[OutputPlugin]] = None,
        tracks: Iterable[Track] = (),
        sort: str = DEFAULT_SORT,
    ) -> "SettingsState":
        """Build a state whose subsystems report errors on ``bus``."""

        def report(message: str) -> None:
            bus.publish(PlayerEvent.ERROR_MESSAGE, message)

        return cls(
            colors=ColorTable(color_names),
            player=Player(default_plugins() if plugins is None else plugins, on_error=report),
            view=LibraryView(tracks, sort=sort, on_error=report),
        )
