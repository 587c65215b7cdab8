"""Single-value options backed by the player and the library view.

 - ``output_plugin``: active output backend, chosen by the player
 - ``buffer_seconds``: buffer size shown in seconds, stored in chunks
 - ``status_display_program``: program run on status changes
 - ``sort``: library view sort specification

These options carry no context; each accessor holds the owner it reads.
"""

from __future__ import annotations

import logging

from config.settings import BYTES_PER_SECOND, CHUNK_SIZE
from player.library_view import LibraryView
from player.output import Player

from .event_bus import EventBus, PlayerEvent
from .option_registry import OptionRegistry, OptionValidationError, parse_int
from .settings_service import SettingsState

__all__ = [
    "OutputPluginOption",
    "BufferSecondsOption",
    "StatusProgramOption",
    "SortOption",
    "chunks_to_seconds",
    "seconds_to_chunks",
    "register_player_options",
]

_log = logging.getLogger(__name__)


def chunks_to_seconds(chunks: int, chunk_size: int = CHUNK_SIZE) -> int:
    return chunks * chunk_size // BYTES_PER_SECOND


def seconds_to_chunks(seconds: int, chunk_size: int = CHUNK_SIZE) -> int:
    return seconds * BYTES_PER_SECOND // chunk_size


class OutputPluginOption:
    context = None

    def __init__(self, player: Player) -> None:
        self._player = player

    def read(self) -> str:
        return self._player.get_op() or ""

    def write(self, text: str) -> None:
        # unknown plugins are reported by the player itself
        self._player.select_output(text)


class BufferSecondsOption:
    """Whole seconds of buffered audio.

    Both conversions truncate, so a value only reads back unchanged when
    ``seconds * BYTES_PER_SECOND`` is a multiple of the chunk size.
    """

    context = None

    def __init__(self, player: Player, chunk_size: int = CHUNK_SIZE) -> None:
        self._player = player
        self._chunk_size = chunk_size

    def read(self) -> str:
        return str(chunks_to_seconds(self._player.buffer_chunks, self._chunk_size))

    def write(self, text: str) -> None:
        seconds = parse_int(text)
        if seconds is None:
            raise OptionValidationError("buffer_seconds must be an integer")
        if seconds < 0:
            raise OptionValidationError("buffer_seconds cannot be negative")
        self._player.set_buffer_chunks(seconds_to_chunks(seconds, self._chunk_size))


class StatusProgramOption:
    context = None

    def __init__(self, state: SettingsState) -> None:
        self._state = state

    def read(self) -> str:
        return self._state.status_display_program or ""

    def write(self, text: str) -> None:
        self._state.status_display_program = text or None


class SortOption:
    context = None

    def __init__(self, view: LibraryView, bus: EventBus) -> None:
        self._view = view
        self._bus = bus

    def read(self) -> str:
        return self._view.sort_string

    def write(self, text: str) -> None:
        self._view.set_sort(text)
        self._bus.publish(PlayerEvent.VIEW_REDRAW, {"option": "sort"})


def register_player_options(
    registry: OptionRegistry,
    state: SettingsState,
    bus: EventBus,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    registry.register("output_plugin", OutputPluginOption(state.player))
    registry.register("buffer_seconds", BufferSecondsOption(state.player, chunk_size))
    registry.register("status_display_program", StatusProgramOption(state))
    registry.register("sort", SortOption(state.view, bus))
