"""Option registry behind ``:set name=value`` and ``:get name``.

Subsystems expose their settings as named options. Each option is a
descriptor binding a name to an accessor object that knows how to render the
current value as text and how to validate and store a new textual value. The
registry never looks at the underlying representation.

Responsibilities:
 - Register options (duplicate names are a defect in the registering code)
 - Look options up by exact name; enumerate in registration order
 - Read/write by name, reporting unknown names separately from bad values
 - Offer a structured ``apply`` result for the command interpreter and echo
   validation failures on the user-facing message channel

Thread-safety: not thread-safe; used from the UI thread only.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Protocol, Union

from player.colors import ColorSlot

from .event_bus import EventBus, PlayerEvent

__all__ = [
    "OptionValidationError",
    "OptionNotFoundError",
    "OptionProgrammingError",
    "DuplicateOptionError",
    "FormatRef",
    "PluginRef",
    "OptionContext",
    "OptionAccessor",
    "OptionDescriptor",
    "SetStatus",
    "SetResult",
    "OptionRegistry",
    "parse_int",
]

_log = logging.getLogger(__name__)


class OptionValidationError(ValueError):
    """A textual value was rejected; the option keeps its previous value."""


class OptionNotFoundError(KeyError):
    """No option is registered under the requested name."""


class OptionProgrammingError(RuntimeError):
    """Misuse by registering code (bad context, duplicate name)."""


class DuplicateOptionError(OptionProgrammingError):
    """Raised when a name is registered twice."""


@dataclass(frozen=True)
class FormatRef:
    """Names the format template slot in ``SettingsState.formats``."""

    name: str


@dataclass(frozen=True)
class PluginRef:
    """Plugin option context; ``handle`` must stay ``None`` for writes."""

    option_name: str
    handle: Any = None


OptionContext = Union[ColorSlot, FormatRef, PluginRef, None]


class OptionAccessor(Protocol):
    context: OptionContext

    def read(self) -> str: ...  # pragma: no cover - structural

    def write(self, text: str) -> None: ...  # pragma: no cover - structural


@dataclass(frozen=True)
class OptionDescriptor:
    name: str
    accessor: OptionAccessor

    @property
    def context(self) -> OptionContext:
        return self.accessor.context

    def get(self) -> str:
        return self.accessor.read()

    def set(self, text: str) -> None:
        self.accessor.write(text)


class SetStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    INVALID = "invalid"


@dataclass(frozen=True)
class SetResult:
    status: SetStatus
    name: str
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SetStatus.OK


_INT_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


def parse_int(text: str) -> Optional[int]:
    """Parse a plain decimal integer; ``None`` if ``text`` is anything else."""
    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


class OptionRegistry:
    """Name -> descriptor mapping preserving registration order."""

    def __init__(self, bus: Optional[EventBus] = None) -> None:
        self._options: Dict[str, OptionDescriptor] = {}
        self._bus = bus

    # Registration -------------------------------------------------
    def register(self, name: str, accessor: OptionAccessor) -> OptionDescriptor:
        if name in self._options:
            raise DuplicateOptionError(f"option '{name}' already registered")
        descriptor = OptionDescriptor(name=name, accessor=accessor)
        self._options[name] = descriptor
        return descriptor

    def is_registered(self, name: str) -> bool:
        return name in self._options

    __contains__ = is_registered

    def __len__(self) -> int:
        return len(self._options)

    def __iter__(self) -> Iterator[OptionDescriptor]:
        return iter(list(self._options.values()))

    # Query --------------------------------------------------------
    def lookup(self, name: str) -> Optional[OptionDescriptor]:
        return self._options.get(name)

    def list(self) -> List[OptionDescriptor]:
        return list(self._options.values())

    def names(self) -> List[str]:
        return list(self._options.keys())

    def for_each(self, visitor: Callable[[OptionDescriptor], None]) -> None:
        for descriptor in list(self._options.values()):
            visitor(descriptor)

    def complete(self, prefix: str) -> List[str]:
        """Registered names starting with ``prefix`` (tab completion)."""
        return [n for n in self._options if n.startswith(prefix)]

    # Read / write -------------------------------------------------
    def _require(self, name: str) -> OptionDescriptor:
        descriptor = self._options.get(name)
        if descriptor is None:
            raise OptionNotFoundError(name)
        return descriptor

    def get_value(self, name: str) -> str:
        return self._require(name).get()

    def read(self, name: str) -> Optional[str]:
        descriptor = self._options.get(name)
        return descriptor.get() if descriptor is not None else None

    def set_value(self, name: str, text: str) -> None:
        """Write ``text`` to option ``name``.

        Raises ``OptionNotFoundError`` for an unknown name and
        ``OptionValidationError`` when the accessor rejects the value.
        """
        self._require(name).set(text)
        if self._bus is not None:
            self._bus.publish(PlayerEvent.OPTION_CHANGED, {"name": name})

    def apply(self, name: str, text: str) -> SetResult:
        """Interpreter entry point: like ``set_value`` but returns a result.

        Rejected values are also shown to the user through the
        ``ERROR_MESSAGE`` channel. Unknown names are only returned.
        """
        try:
            self.set_value(name, text)
        except OptionNotFoundError:
            return SetResult(SetStatus.NOT_FOUND, name, f"no such option {name}")
        except OptionValidationError as exc:
            _log.info("rejected %s=%r: %s", name, text, exc)
            if self._bus is not None:
                self._bus.publish(PlayerEvent.ERROR_MESSAGE, str(exc))
            return SetResult(SetStatus.INVALID, name, str(exc))
        return SetResult(SetStatus.OK, name)
