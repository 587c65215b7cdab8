"""Shared fixtures: an isolated bus, settings state and populated registry."""

from __future__ import annotations

import pytest

from tui.app.config_store import OptionConfig
from tui.services.event_bus import EventBus, PlayerEvent
from tui.services.option_registry import OptionRegistry
from tui.services.options_lifecycle import init_options
from tui.services.settings_service import SettingsState


class EventRecorder:
    """Collects every ``PlayerEvent`` published on a bus."""

    def __init__(self, bus: EventBus) -> None:
        self.events = []
        for kind in PlayerEvent:
            bus.subscribe(kind, self.events.append)

    def names(self):
        return [e.name for e in self.events]

    def count(self, kind: PlayerEvent) -> int:
        return sum(1 for e in self.events if e.name == kind.value)

    def payloads(self, kind: PlayerEvent):
        return [e.payload for e in self.events if e.name == kind.value]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def events(bus):
    return EventRecorder(bus)


@pytest.fixture
def state(bus):
    return SettingsState.create(bus)


@pytest.fixture
def store():
    return OptionConfig()


@pytest.fixture
def registry(bus, state, store):
    reg = OptionRegistry(bus)
    init_options(reg, state, store, bus)
    return reg
