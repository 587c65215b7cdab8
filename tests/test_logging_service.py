import json
import logging

import pytest

from tui.services.event_bus import EventBus, PlayerEvent
from tui.services.logging_service import LoggingService


@pytest.fixture()
def capture():
    bus = EventBus()
    svc = LoggingService(capacity=5, bus=bus)
    svc.attach_root()
    yield svc, bus
    svc.detach_root()


def test_capture_and_retrieve(capture):
    svc, _ = capture
    logging.getLogger("tui.services.format_options").info("format_title=%s", "%t")
    assert any(e.message == "format_title=%t" for e in svc.recent())


def test_capacity_eviction(capture):
    svc, _ = capture
    for i in range(10):
        logging.getLogger("cap").info("M%d", i)
    recents = svc.recent()
    assert len(recents) == 5
    assert recents[0].message == "M5"
    assert [e.message for e in svc.recent(limit=2)] == ["M8", "M9"]


def test_filtering(capture):
    svc, _ = capture
    logging.getLogger("player.output").debug("output plugin None -> alsa")
    logging.getLogger("tui.services.option_registry").info("rejected")
    assert all(e.level == "INFO" for e in svc.filter(level="INFO"))
    player = svc.filter(name_contains="player")
    assert player and all("player" in e.name for e in player)


def test_records_published_on_bus(capture):
    svc, bus = capture
    payloads = []
    bus.subscribe(PlayerEvent.LOG_RECORD_ADDED, lambda evt: payloads.append(evt.payload))
    logging.getLogger("evt").warning("Something happened")
    assert payloads and payloads[-1]["level"] == "WARNING"


def test_export_jsonl(capture, tmp_path):
    svc, _ = capture
    logging.getLogger("exp").warning("one")
    logging.getLogger("exp").error("two")
    out = tmp_path / "log.jsonl"
    written = svc.export_jsonl(out, level="ERROR")
    lines = out.read_text(encoding="utf-8").splitlines()
    assert written == 1 and len(lines) == 1
    assert json.loads(lines[0])["message"] == "two"


def test_detach_stops_capture():
    svc = LoggingService(capacity=5)
    svc.attach_root()
    svc.detach_root()
    assert not svc.attached
    logging.getLogger("late").warning("after detach")
    assert svc.recent() == []
