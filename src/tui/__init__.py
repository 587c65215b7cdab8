"""Terminal UI layer public API.

Small surface for the command interpreter, the CLI and tests:
- the option registry and its error classes
- the notification bus

Bootstrap helpers live in ``tui.app`` and are not imported here so that
importing the registry stays free of process-level side effects.
"""

from __future__ import annotations

from .services.event_bus import EventBus, Event, PlayerEvent  # noqa: F401
from .services.option_registry import (  # noqa: F401
    DuplicateOptionError,
    OptionDescriptor,
    OptionNotFoundError,
    OptionRegistry,
    OptionValidationError,
    SetResult,
    SetStatus,
)

__all__ = [
    "EventBus",
    "Event",
    "PlayerEvent",
    "DuplicateOptionError",
    "OptionDescriptor",
    "OptionNotFoundError",
    "OptionRegistry",
    "OptionValidationError",
    "SetResult",
    "SetStatus",
]
