"""Options defined by output plugins (``dsp.*`` / ``mixer.*``).

Names are not known in advance: the player enumerates the options of every
loaded plugin and each one is registered the first time it is seen. Values
are passed through to the plugin untouched; reading one back is not
supported at this layer and yields an empty string.
"""

from __future__ import annotations

import logging
from typing import Any, List

from player.output import Player

from .option_registry import OptionProgrammingError, OptionRegistry, PluginRef

__all__ = ["PluginOption", "register_plugin_options"]

_log = logging.getLogger(__name__)


class PluginOption:
    def __init__(self, player: Player, name: str, handle: Any = None) -> None:
        self.context = PluginRef(option_name=name, handle=handle)
        self._player = player

    def read(self) -> str:
        return ""

    def write(self, text: str) -> None:
        ref = self.context
        _log.debug("%s=%s", ref.option_name, text)
        if ref.handle is not None:
            raise OptionProgrammingError(f"plugin option {ref.option_name} has a handle")
        self._player.set_op_option(ref.option_name, text)


def register_plugin_options(registry: OptionRegistry, player: Player) -> List[str]:
    """Run a discovery pass; returns the names added by this pass."""
    added: List[str] = []

    def on_option(name: str) -> None:
        if registry.is_registered(name):
            return
        _log.debug("adding player option %s", name)
        registry.register(name, PluginOption(player, name))
        added.append(name)

    player.for_each_op_option(on_option)
    return added
