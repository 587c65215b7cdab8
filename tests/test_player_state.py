import pytest

from player.colors import COLOR_NAMES, ColorSlot, ColorTable, ColorTableKind
from player.output import OutputPlugin, Player, default_plugins
from tui.services.event_bus import EventBus, PlayerEvent
from tui.services.settings_service import SettingsState


def test_color_table_defaults_and_bounds():
    table = ColorTable()
    assert table.names == COLOR_NAMES
    assert table.pair("error") == (-1, 1)
    with pytest.raises(ValueError):
        table.set(ColorSlot(ColorTableKind.BG, 0), 256)
    with pytest.raises(IndexError):
        table.get(ColorSlot(ColorTableKind.FG, len(COLOR_NAMES)))


def test_player_rejects_unknown_output_and_keeps_current():
    errors = []
    player = Player(default_plugins(), on_error=errors.append)
    assert player.select_output("alsa")
    assert not player.select_output("")
    assert player.get_op() == "alsa"
    assert errors == ["no such output plugin: "]


def test_player_enumerates_dsp_then_mixer_options():
    player = Player([OutputPlugin("x", dsp_options={"a": "1"}, mixer_options={"b": "2"})])
    names = []
    player.for_each_op_option(names.append)
    assert names == ["dsp.x.a", "mixer.x.b"]


def test_player_option_name_resolution():
    errors = []
    player = Player(default_plugins(), on_error=errors.append)
    assert player.set_op_option("dsp.oss.device", "/dev/dsp1")
    assert player.get_op_option("dsp.oss.device") == "/dev/dsp1"
    assert not player.set_op_option("dsp.pulse.device", "x")
    assert not player.set_op_option("volume.alsa.device", "x")
    assert not player.set_op_option("nodots", "x")
    assert player.get_op_option("mixer.ao.channel") is None
    assert len(errors) == 3


def test_duplicate_plugin_rejected():
    player = Player([OutputPlugin("alsa")])
    with pytest.raises(ValueError):
        player.add_plugin(OutputPlugin("alsa"))


def test_negative_buffer_rejected():
    player = Player()
    with pytest.raises(ValueError):
        player.set_buffer_chunks(-1)


def test_settings_state_reports_subsystem_errors_on_bus():
    bus = EventBus()
    seen = []
    bus.subscribe(PlayerEvent.ERROR_MESSAGE, lambda e: seen.append(e.payload))
    state = SettingsState.create(bus)
    state.player.select_output("nope")
    state.view.set_sort("nope")
    assert seen == ["no such output plugin: nope", "invalid sort key 'nope'"]
    assert state.formats == {} and state.status_display_program is None
