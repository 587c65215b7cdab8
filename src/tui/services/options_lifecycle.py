"""Startup population and shutdown flush of the option registry.

Registration order is fixed: format templates, color pairs, the player and
view options, then whatever the output plugins declare. The command
interpreter must not be reachable before ``init_options`` returns.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from config.settings import CHUNK_SIZE
from player.format_print import format_valid

from .color_options import register_color_options
from .event_bus import EventBus
from .format_options import FORMAT_DEFAULTS, FormatOption
from .option_registry import FormatRef, OptionRegistry
from .player_options import register_player_options
from .plugin_options import register_plugin_options
from .settings_service import SettingsState

__all__ = ["StringOptionStore", "init_options", "exit_options"]

_log = logging.getLogger(__name__)


class StringOptionStore(Protocol):
    def get_str_option(self, name: str) -> Optional[str]: ...  # pragma: no cover

    def set_str_option(self, name: str, value: str) -> None: ...  # pragma: no cover


def init_options(
    registry: OptionRegistry,
    state: SettingsState,
    store: StringOptionStore,
    bus: EventBus,
    *,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    for name, default in FORMAT_DEFAULTS.items():
        value = store.get_str_option(name)
        if value is None:
            value = default
        elif not format_valid(value):
            _log.warning("stored %s=%r is not a valid format, using default", name, value)
            value = default
        state.formats[name] = value
        registry.register(name, FormatOption(state.formats, FormatRef(name), bus))

    register_color_options(registry, state.colors, bus)
    register_player_options(registry, state, bus, chunk_size=chunk_size)
    added = register_plugin_options(registry, state.player)
    _log.info("registered %d options (%d from plugins)", len(registry), len(added))


def exit_options(state: SettingsState, store: StringOptionStore) -> None:
    for name in FORMAT_DEFAULTS:
        store.set_str_option(name, state.formats[name])
