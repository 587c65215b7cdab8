"""Synchronous notification bus for the terminal UI.

Option accessors and player subsystems publish fire-and-forget notifications
("color slot changed", "redraw the current view", "show this error") and the
UI layer subscribes to them. Producers never learn who listens.

 - Handlers run synchronously on the publishing thread, in subscription order
 - A failing handler is recorded in ``errors`` and does not stop the others
 - ``once`` subscriptions drop themselves after their first successful call
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "PlayerEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class PlayerEvent(str, Enum):
    COLOR_CHANGED = "color_changed"
    VIEW_REDRAW = "view_redraw"
    TITLE_REDRAW = "title_redraw"
    ERROR_MESSAGE = "error_message"
    OPTION_CHANGED = "option_changed"
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | PlayerEvent) -> str:
    return name.value if isinstance(name, PlayerEvent) else name


class EventBus:
    """Publish/subscribe dispatcher.

    Thread-safety: the subscription table is guarded by a re-entrant lock and
    handlers are called with the lock released, so a handler may subscribe or
    unsubscribe while being dispatched.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    def subscribe(
        self, name: str | PlayerEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        sub = Subscription(event=_key(name), handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(sub.event, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket and sub in bucket:
                bucket.remove(sub)
                if not bucket:
                    del self._subs[sub.event]
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    def publish(self, name: str | PlayerEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        finished: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                with self._lock:
                    self._errors.append((evt, exc))
            else:
                if sub.once:
                    finished.append(sub)
        for sub in finished:
            self.unsubscribe(sub)
        return evt

    def subscriber_count(self, name: str | PlayerEvent) -> int:
        with self._lock:
            return len(self._subs.get(_key(name), ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
