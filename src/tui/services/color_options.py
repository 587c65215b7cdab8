"""``color_<name>_bg`` / ``color_<name>_fg`` options."""

from __future__ import annotations

import logging

from config.settings import COLOR_MAX, COLOR_MIN
from player.colors import ColorSlot, ColorTable

from .event_bus import EventBus, PlayerEvent
from .option_registry import (
    OptionProgrammingError,
    OptionRegistry,
    OptionValidationError,
    parse_int,
)

__all__ = ["ColorOption", "color_option_name", "register_color_options"]

_log = logging.getLogger(__name__)


def color_option_name(color_name: str, slot: ColorSlot) -> str:
    return f"color_{color_name}_{slot.table.value}"


class ColorOption:
    def __init__(self, colors: ColorTable, slot: ColorSlot, bus: EventBus) -> None:
        if slot.index < 0 or slot.index >= len(colors):
            raise OptionProgrammingError(f"color slot {slot.index} outside 0..{len(colors) - 1}")
        self.context = slot
        self._colors = colors
        self._bus = bus

    def read(self) -> str:
        return str(self._colors.get(self.context))

    def write(self, text: str) -> None:
        color = parse_int(text)
        if color is None or color < COLOR_MIN or color > COLOR_MAX:
            raise OptionValidationError(f"color value must be {COLOR_MIN}..{COLOR_MAX}")
        self._colors.set(self.context, color)
        # only the one color pair needs re-initializing
        self._bus.publish(
            PlayerEvent.COLOR_CHANGED,
            {"index": self.context.index, "table": self.context.table.value, "value": color},
        )


def register_color_options(registry: OptionRegistry, colors: ColorTable, bus: EventBus) -> int:
    """Register a bg and a fg option per color name; returns the count added."""
    for name, bg, fg in colors.slots():
        registry.register(color_option_name(name, bg), ColorOption(colors, bg, bus))
        registry.register(color_option_name(name, fg), ColorOption(colors, fg, bus))
    _log.debug("registered %d color options", 2 * len(colors))
    return 2 * len(colors)
