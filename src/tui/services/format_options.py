"""Track format template options (``format_*`` and ``altformat_*``).

The ``alt`` variants are used for files without tags. Templates are checked
against the grammar in ``player.format_print`` before they replace the
current value; a rejected template leaves the old one in place.
"""

from __future__ import annotations

import logging
from typing import Dict

from player.format_print import format_valid

from .event_bus import EventBus, PlayerEvent
from .option_registry import FormatRef, OptionProgrammingError, OptionValidationError

__all__ = ["FORMAT_DEFAULTS", "FORMAT_NAMES", "FormatOption"]

_log = logging.getLogger(__name__)

FORMAT_DEFAULTS: Dict[str, str] = {
    "altformat_current": " %F%= %d ",
    "altformat_playlist": " %f%= %d ",
    "altformat_title": "%f",
    "altformat_trackwin": " %f%= %d ",
    "format_current": " %a - %l - %02n. %t%= %y %d ",
    "format_playlist": " %a - %l - %02n. %t%= %y %d ",
    "format_title": "%a - %l - %t (%y)",
    "format_trackwin": " %02n. %t%= %y %d ",
}

FORMAT_NAMES = tuple(FORMAT_DEFAULTS)


class FormatOption:
    def __init__(self, formats: Dict[str, str], ref: FormatRef, bus: EventBus) -> None:
        if ref.name not in formats:
            raise OptionProgrammingError(f"format '{ref.name}' registered before it was loaded")
        self.context = ref
        self._formats = formats
        self._bus = bus

    def read(self) -> str:
        return self._formats[self.context.name]

    def write(self, text: str) -> None:
        name = self.context.name
        _log.debug("%s=%s (old=%s)", name, text, self._formats[name])
        if not format_valid(text):
            raise OptionValidationError("invalid format string")
        self._formats[name] = text
        self._bus.publish(PlayerEvent.VIEW_REDRAW, {"option": name})
        self._bus.publish(PlayerEvent.TITLE_REDRAW, {"option": name})
