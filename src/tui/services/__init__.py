"""Service layer exports.

Responsibilities:
 - Notification bus (``EventBus``)
 - Option registry and the accessor families registered into it
 - Settings state aggregate the accessors are built against
"""

from .event_bus import EventBus, PlayerEvent  # noqa: F401
from .option_registry import OptionRegistry  # noqa: F401
from .settings_service import SettingsState  # noqa: F401
from .options_lifecycle import init_options, exit_options  # noqa: F401

__all__ = [
    "EventBus",
    "PlayerEvent",
    "OptionRegistry",
    "SettingsState",
    "init_options",
    "exit_options",
]
