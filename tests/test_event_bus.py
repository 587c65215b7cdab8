from tui.services.event_bus import EventBus, PlayerEvent


def test_subscribe_and_publish_order():
    bus = EventBus()
    order = []
    bus.subscribe(PlayerEvent.VIEW_REDRAW, lambda e: order.append(("h1", e.name)))
    bus.subscribe(PlayerEvent.VIEW_REDRAW, lambda e: order.append(("h2", e.name)))
    bus.publish(PlayerEvent.VIEW_REDRAW, {"option": "sort"})
    assert order == [("h1", "view_redraw"), ("h2", "view_redraw")]


def test_string_and_enum_names_are_interchangeable():
    bus = EventBus()
    seen = []
    bus.subscribe("color_changed", lambda e: seen.append(e.payload))
    bus.publish(PlayerEvent.COLOR_CHANGED, 3)
    assert seen == [3]
    assert bus.subscriber_count(PlayerEvent.COLOR_CHANGED) == 1


def test_once_subscription():
    bus = EventBus()
    calls = []
    bus.subscribe(PlayerEvent.TITLE_REDRAW, lambda e: calls.append(1), once=True)
    bus.publish(PlayerEvent.TITLE_REDRAW)
    bus.publish(PlayerEvent.TITLE_REDRAW)
    assert calls == [1]
    assert bus.subscriber_count(PlayerEvent.TITLE_REDRAW) == 0


def test_unsubscribe():
    bus = EventBus()
    calls = []
    sub = bus.subscribe(PlayerEvent.ERROR_MESSAGE, lambda e: calls.append(e.payload))
    bus.publish(PlayerEvent.ERROR_MESSAGE, "a")
    bus.unsubscribe(sub)
    bus.publish(PlayerEvent.ERROR_MESSAGE, "b")
    assert calls == ["a"]
    assert not sub.active


def test_handler_failure_is_isolated():
    bus = EventBus()
    calls = []

    def bad(e):
        raise RuntimeError("boom")

    bus.subscribe(PlayerEvent.OPTION_CHANGED, bad)
    bus.subscribe(PlayerEvent.OPTION_CHANGED, lambda e: calls.append("ok"))
    bus.publish(PlayerEvent.OPTION_CHANGED)
    assert calls == ["ok"]
    assert len(bus.errors) == 1
    assert isinstance(bus.errors[0][1], RuntimeError)


def test_handler_may_subscribe_during_dispatch():
    bus = EventBus()
    late = []

    def first(e):
        bus.subscribe(PlayerEvent.VIEW_REDRAW, lambda ev: late.append(ev.payload))

    bus.subscribe(PlayerEvent.VIEW_REDRAW, first, once=True)
    bus.publish(PlayerEvent.VIEW_REDRAW, 1)
    bus.publish(PlayerEvent.VIEW_REDRAW, 2)
    assert late == [2]
