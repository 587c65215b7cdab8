import pytest

from player.colors import ColorSlot, ColorTable, ColorTableKind
from tui.services.color_options import ColorOption, register_color_options
from tui.services.event_bus import PlayerEvent
from tui.services.option_registry import (
    OptionProgrammingError,
    OptionRegistry,
    OptionValidationError,
    SetStatus,
)


@pytest.fixture
def colors():
    return ColorTable(("red", "green", "blue"))


@pytest.fixture
def color_registry(bus, colors):
    reg = OptionRegistry(bus)
    register_color_options(reg, colors, bus)
    return reg


def test_names_bg_then_fg_per_color(color_registry):
    assert color_registry.names() == [
        "color_red_bg",
        "color_red_fg",
        "color_green_bg",
        "color_green_fg",
        "color_blue_bg",
        "color_blue_fg",
    ]


def test_round_trip_and_default_color(color_registry):
    color_registry.set_value("color_red_bg", "-1")
    assert color_registry.get_value("color_red_bg") == "-1"
    color_registry.set_value("color_blue_fg", "255")
    assert color_registry.get_value("color_blue_fg") == "255"


@pytest.mark.parametrize("bad", ["300", "256", "-2", "red", "", "1.0"])
def test_invalid_values_leave_color_unchanged(color_registry, events, bad):
    color_registry.set_value("color_red_bg", "4")
    events.clear()
    result = color_registry.apply("color_red_bg", bad)
    assert result.status is SetStatus.INVALID
    assert result.message == "color value must be -1..255"
    assert color_registry.get_value("color_red_bg") == "4"
    assert events.payloads(PlayerEvent.ERROR_MESSAGE) == ["color value must be -1..255"]
    assert events.count(PlayerEvent.COLOR_CHANGED) == 0


def test_set_writes_only_the_addressed_table(color_registry, colors):
    color_registry.set_value("color_green_fg", "9")
    assert colors.pair("green") == (-1, 9)
    color_registry.set_value("color_green_bg", "3")
    assert colors.pair("green") == (3, 9)
    assert colors.pair("red") == (-1, -1)


def test_color_change_notifies_slot_index(color_registry, events):
    color_registry.set_value("color_blue_fg", "12")
    assert events.payloads(PlayerEvent.COLOR_CHANGED) == [
        {"index": 2, "table": "fg", "value": 12}
    ]


def test_context_is_tagged_slot(color_registry):
    ctx = color_registry.lookup("color_green_fg").context
    assert ctx == ColorSlot(ColorTableKind.FG, 1)


def test_out_of_range_slot_is_programming_error(colors, bus):
    with pytest.raises(OptionProgrammingError):
        ColorOption(colors, ColorSlot(ColorTableKind.BG, 3), bus)


def test_accessor_write_raises_validation_error(colors, bus):
    opt = ColorOption(colors, ColorSlot(ColorTableKind.BG, 0), bus)
    with pytest.raises(OptionValidationError):
        opt.write("1000")
