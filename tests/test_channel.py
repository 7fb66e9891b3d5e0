from dataclasses import dataclass

import pytest

from demexlight.channel import (
    ColorPresetRef,
    ColorRgbChannel,
    IntensityChannel,
    MaintenanceChannel,
    PanTilt,
    PositionPanTiltChannel,
    PositionPresetRef,
    Rgbw,
    StrobeChannel,
    ToggleFlagsChannel,
    ZoomChannel,
    channel_name_by_id,
    color_from_rgb,
    stable_hash,
)
from demexlight.errors import PresetNotFoundError


@dataclass
class _Preset:
    name: str


class _Presets:
    def __init__(self, colors=None, positions=None, names=None):
        self.colors = colors or {}
        self.positions = positions or {}
        self.names = names or {}

    def get_color(self, preset_id):
        if preset_id in self.names:
            return _Preset(self.names[preset_id])
        raise PresetNotFoundError(preset_id)

    def get_position(self, preset_id):
        if preset_id in self.names:
            return _Preset(self.names[preset_id])
        raise PresetNotFoundError(preset_id)

    def get_color_for_fixture(self, preset_id, fixture_id):
        return self.colors.get((preset_id, fixture_id))

    def get_position_for_fixture(self, preset_id, fixture_id):
        return self.positions.get((preset_id, fixture_id))


EMPTY = _Presets()


def test_stable_hash_is_deterministic_and_64_bit():
    assert stable_hash("White") == stable_hash("White")
    assert 0 <= stable_hash("White") < 2**64
    assert stable_hash("White") != stable_hash("WhiteFine")


def test_maintenance_type_id_comes_from_hash():
    channel = MaintenanceChannel("ColorTemp")
    assert channel.type_id() == stable_hash("ColorTemp") & 0xFFFF
    assert MaintenanceChannel("ColorTemp").type_id() == channel.type_id()


@pytest.mark.parametrize(
    "channel_id, name",
    [
        (0, "Intensity"),
        (1, "Strobe"),
        (2, "Zoom"),
        (10, "ColorRGB"),
        (20, "PositionPanTilt"),
        (30, "ToggleFlags"),
        (999, "Unknown"),
    ],
)
def test_channel_name_by_id(channel_id, name):
    assert channel_name_by_id(channel_id) == name


def test_channel_name_uses_type_id():
    assert IntensityChannel().name() == "Intensity"
    assert ToggleFlagsChannel().name() == "ToggleFlags"


@pytest.mark.parametrize(
    "channel, width",
    [
        (IntensityChannel(True), 2),
        (IntensityChannel(False), 1),
        (StrobeChannel(), 1),
        (ZoomChannel(True), 2),
        (ColorRgbChannel(True), 6),
        (ColorRgbChannel(False), 3),
        (PositionPanTiltChannel(True), 4),
        (PositionPanTiltChannel(False), 2),
        (MaintenanceChannel("White"), 1),
        (ToggleFlagsChannel({"On": 1}), 1),
    ],
)
def test_packet_length_matches_bandwidth(channel, width):
    assert channel.address_bandwidth() == width
    assert len(channel.generate_data_packet(1, EMPTY)) == width


def test_home_resets_every_channel():
    channels = [
        IntensityChannel(True, 0.7),
        StrobeChannel(0.3),
        ZoomChannel(False, 0.4),
        ColorRgbChannel(True, Rgbw(0.1, 0.2, 0.3, 0.4)),
        PositionPanTiltChannel(True, PanTilt(0.5, 0.6)),
        MaintenanceChannel("White", 12),
        ToggleFlagsChannel({"On": 131}, "On"),
    ]
    assert not any(c.is_home() for c in channels)
    for channel in channels:
        channel.home()
    assert all(c.is_home() for c in channels)
    assert all(set(c.generate_data_packet(1, EMPTY)) == {0} for c in channels)


def test_full_intensity_packet():
    assert IntensityChannel(True, 1.0).generate_data_packet(1, EMPTY) == [255, 0]


@pytest.mark.parametrize("value", [0.0, 0.13, 0.5, 0.77, 1.0])
def test_fine_coarse_byte_matches_coarse_packet(value):
    fine = IntensityChannel(True, value).generate_data_packet(1, EMPTY)
    coarse = IntensityChannel(False, value).generate_data_packet(1, EMPTY)
    assert fine[0] == coarse[0]
    assert all(0 <= b <= 255 for b in fine)


def test_out_of_range_values_saturate():
    assert StrobeChannel(2.0).generate_data_packet(1, EMPTY) == [255]
    assert ZoomChannel(False, -1.0).generate_data_packet(1, EMPTY) == [0]


def test_color_preset_packet_matches_direct_color():
    presets = _Presets(colors={(4, 9): (0.2, 0.4, 0.6, 0.0)})
    by_preset = ColorRgbChannel(True, ColorPresetRef(4)).generate_data_packet(9, presets)
    direct = ColorRgbChannel(True, Rgbw(0.2, 0.4, 0.6, 0.0)).generate_data_packet(9, presets)
    assert by_preset == direct


def test_missing_color_preset_outputs_black():
    packet = ColorRgbChannel(False, ColorPresetRef(4)).generate_data_packet(9, EMPTY)
    assert packet == [0, 0, 0]


def test_position_preset_packet_matches_direct_position():
    presets = _Presets(positions={(2, 3): (0.25, 0.75)})
    by_preset = PositionPanTiltChannel(True, PositionPresetRef(2)).generate_data_packet(3, presets)
    direct = PositionPanTiltChannel(True, PanTilt(0.25, 0.75)).generate_data_packet(3, presets)
    assert by_preset == direct
    assert PositionPanTiltChannel(False, PositionPresetRef(2)).generate_data_packet(
        3, EMPTY
    ) == [0, 0]


def test_maintenance_packet_is_raw_value():
    assert MaintenanceChannel("White", 42).generate_data_packet(1, EMPTY) == [42]


def test_toggle_flags_packet():
    channel = ToggleFlagsChannel({"Turn On": 131, "Turn Off": 231})
    assert channel.generate_data_packet(1, EMPTY) == [0]
    channel.active = "Turn On"
    assert channel.generate_data_packet(1, EMPTY) == [131]
    channel.active = "Missing"
    assert channel.generate_data_packet(1, EMPTY) == [0]


def test_color_from_rgb_sets_white_to_zero():
    assert color_from_rgb([0.1, 0.2, 0.3]) == Rgbw(0.1, 0.2, 0.3, 0.0)


def test_describe_direct_values():
    assert Rgbw(1.0, 0.0, 0.0, 0.0).describe(EMPTY) == "255, 0, 0, 0"
    assert PanTilt(0.0, 1.0).describe(EMPTY) == "0, 255"


def test_describe_preset_refs():
    presets = _Presets(names={5: "Deep Blue"})
    assert ColorPresetRef(5).describe(presets) == "Deep Blue"
    assert PositionPresetRef(5).describe(presets) == "Deep Blue"
    assert ColorPresetRef(6).describe(presets) == "Preset not found"
    assert PositionPresetRef(6).describe(presets) == "Preset not found"


def test_channels_compare_by_value():
    assert IntensityChannel(True, 0.5) == IntensityChannel(True, 0.5)
    assert IntensityChannel(True, 0.5) != IntensityChannel(False, 0.5)