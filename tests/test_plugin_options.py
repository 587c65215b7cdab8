import pytest

from player.output import OutputPlugin, Player
from tui.services.event_bus import PlayerEvent
from tui.services.option_registry import OptionProgrammingError, OptionRegistry, PluginRef
from tui.services.plugin_options import PluginOption, register_plugin_options


def _player(**kwargs):
    return Player(
        [
            OutputPlugin("alsa", dsp_options={"device": "default"}, mixer_options={"channel": "PCM"}),
            OutputPlugin("null"),
        ],
        **kwargs,
    )


def test_discovery_registers_each_plugin_option():
    player = _player()
    reg = OptionRegistry()
    added = register_plugin_options(reg, player)
    assert added == ["dsp.alsa.device", "mixer.alsa.channel"]
    assert reg.names() == added


def test_discovery_is_idempotent():
    player = _player()
    reg = OptionRegistry()
    register_plugin_options(reg, player)
    assert register_plugin_options(reg, player) == []
    assert len(reg) == 2


def test_read_is_always_empty():
    player = _player()
    reg = OptionRegistry()
    register_plugin_options(reg, player)
    reg.set_value("dsp.alsa.device", "hw:1,0")
    assert reg.get_value("dsp.alsa.device") == ""
    # the plugin did receive the value
    assert player.get_op_option("dsp.alsa.device") == "hw:1,0"


def test_write_forwards_verbatim():
    player = _player()
    opt = PluginOption(player, "mixer.alsa.channel")
    opt.write("  Master  ")
    assert player.get_op_option("mixer.alsa.channel") == "  Master  "
    assert opt.context == PluginRef("mixer.alsa.channel")


def test_handle_must_be_empty_for_writes():
    opt = PluginOption(_player(), "dsp.alsa.device", handle=object())
    with pytest.raises(OptionProgrammingError):
        opt.write("x")


def test_plugin_rejection_reported_by_player(registry, state, events):
    state.player.plugins[0].dsp_options.pop("device")
    result = registry.apply("dsp.alsa.device", "hw:0")
    assert result.ok
    assert events.payloads(PlayerEvent.ERROR_MESSAGE) == ["no such option: dsp.alsa.device"]


def test_plugins_added_after_startup_are_discovered_later(registry, state):
    before = len(registry)
    state.player.add_plugin(OutputPlugin("jack", dsp_options={"server": "default"}))
    added = register_plugin_options(registry, state.player)
    assert added == ["dsp.jack.server"]
    assert len(registry) == before + 1
