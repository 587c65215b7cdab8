"""Output plugin selection, buffering and per-plugin options.

``Player`` is the slice of the playback engine that the option layer talks
to. It does not decode or play anything; it owns the settings that the
engine reads:

 - the name of the selected output plugin
 - the buffer size, counted in ``CHUNK_SIZE`` chunks
 - every plugin's string options, named ``dsp.<plugin>.<opt>`` for the
   device side and ``mixer.<plugin>.<opt>`` for the volume mixer

Rejections (unknown plugin, unknown option) are reported through the
``on_error`` callback rather than raised; the caller treats them as the
engine's concern.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from config.settings import DEFAULT_BUFFER_CHUNKS

__all__ = ["OutputPlugin", "Player", "OP_OPTION_KINDS", "default_plugins"]

_log = logging.getLogger(__name__)

OP_OPTION_KINDS: Tuple[str, ...] = ("dsp", "mixer")


@dataclass
class OutputPlugin:
    """An output backend and its tunables.

    Attributes
    ----------
    name: Plugin identifier used by ``output_plugin`` (e.g. ``alsa``).
    dsp_options: Device-side options, leaf name -> current value.
    mixer_options: Mixer options, leaf name -> current value.
    """

    name: str
    dsp_options: Dict[str, str] = field(default_factory=dict)
    mixer_options: Dict[str, str] = field(default_factory=dict)

    def _bucket(self, kind: str) -> Dict[str, str]:
        if kind == "dsp":
            return self.dsp_options
        if kind == "mixer":
            return self.mixer_options
        raise KeyError(kind)

    def option_names(self) -> List[str]:
        names = [f"dsp.{self.name}.{leaf}" for leaf in self.dsp_options]
        names += [f"mixer.{self.name}.{leaf}" for leaf in self.mixer_options]
        return names

    def get_option(self, kind: str, leaf: str) -> str:
        return self._bucket(kind)[leaf]

    def set_option(self, kind: str, leaf: str, value: str) -> None:
        bucket = self._bucket(kind)
        if leaf not in bucket:
            raise KeyError(leaf)
        bucket[leaf] = value


class Player:
    def __init__(
        self,
        plugins: Iterable[OutputPlugin] = (),
        *,
        buffer_chunks: int = DEFAULT_BUFFER_CHUNKS,
        on_error: Optional[Callable[[str], None]] = None,
    ) -> None:
        self._plugins: Dict[str, OutputPlugin] = {}
        for plugin in plugins:
            self._plugins[plugin.name] = plugin
        self._output: Optional[str] = None
        # playback thread reads the chunk count while it refills the buffer
        self._buffer_lock = Lock()
        self._buffer_chunks = buffer_chunks
        self._on_error = on_error

    def _report(self, message: str) -> None:
        _log.info("player: %s", message)
        if self._on_error is not None:
            self._on_error(message)

    # Output selection ---------------------------------------------
    @property
    def plugins(self) -> List[OutputPlugin]:
        return list(self._plugins.values())

    def add_plugin(self, plugin: OutputPlugin) -> None:
        """Register a plugin loaded at runtime; its options show up on the next enumeration."""
        if plugin.name in self._plugins:
            raise ValueError(f"output plugin '{plugin.name}' already loaded")
        self._plugins[plugin.name] = plugin

    def get_op(self) -> Optional[str]:
        return self._output

    def select_output(self, name: str) -> bool:
        """Switch to output plugin ``name``. Returns False if it does not exist."""
        if name not in self._plugins:
            self._report(f"no such output plugin: {name}")
            return False
        if name != self._output:
            _log.debug("output plugin %s -> %s", self._output, name)
        self._output = name
        return True

    # Buffering ----------------------------------------------------
    @property
    def buffer_chunks(self) -> int:
        with self._buffer_lock:
            return self._buffer_chunks

    def set_buffer_chunks(self, nr_chunks: int) -> None:
        if nr_chunks < 0:
            raise ValueError("buffer size cannot be negative")
        with self._buffer_lock:
            self._buffer_chunks = nr_chunks

    # Plugin options -----------------------------------------------
    def for_each_op_option(self, callback: Callable[[str], None]) -> None:
        """Call ``callback(name)`` once for every option of every plugin."""
        for plugin in list(self._plugins.values()):
            for name in plugin.option_names():
                callback(name)

    def _resolve(self, name: str) -> Optional[Tuple[OutputPlugin, str, str]]:
        parts = name.split(".", 2)
        if len(parts) != 3 or parts[0] not in OP_OPTION_KINDS:
            return None
        kind, plugin_name, leaf = parts
        plugin = self._plugins.get(plugin_name)
        if plugin is None:
            return None
        return plugin, kind, leaf

    def get_op_option(self, name: str) -> Optional[str]:
        """Current value as the output plugin sees it; the option layer only writes."""
        resolved = self._resolve(name)
        if resolved is None:
            return None
        plugin, kind, leaf = resolved
        try:
            return plugin.get_option(kind, leaf)
        except KeyError:
            return None

    def set_op_option(self, name: str, value: str) -> bool:
        resolved = self._resolve(name)
        if resolved is None:
            self._report(f"no such option: {name}")
            return False
        plugin, kind, leaf = resolved
        try:
            plugin.set_option(kind, leaf, value)
        except KeyError:
            self._report(f"no such option: {name}")
            return False
        return True


def default_plugins() -> List[OutputPlugin]:
    """Output backends known to a stock build, with their initial options."""
    return [
        OutputPlugin("alsa", dsp_options={"device": "default"}, mixer_options={"channel": "PCM"}),
        OutputPlugin(
            "oss",
            dsp_options={"device": "/dev/dsp"},
            mixer_options={"device": "/dev/mixer", "channel": "PCM"},
        ),
        OutputPlugin("ao", dsp_options={"driver": "", "wav_counter": "1"}),
    ]
