import pytest

from demexlight.channel import (
    FIXTURE_CHANNEL_COLOR_ID,
    FIXTURE_CHANNEL_INTENSITY_ID,
    FIXTURE_CHANNEL_STROBE,
    ColorRgbChannel,
    IntensityChannel,
    MaintenanceChannel,
    PanTilt,
    PositionPanTiltChannel,
    Rgbw,
    StrobeChannel,
    ToggleFlagsChannel,
    ZoomChannel,
)
from demexlight.errors import (
    ChannelNotFoundError,
    DuplicateChannelTypeError,
    EmptyPatchError,
)
from demexlight.fixture import Fixture


def make_wash():
    return Fixture(
        1,
        "WASH 1",
        [
            PositionPanTiltChannel(True),
            IntensityChannel(True),
            StrobeChannel(),
            ColorRgbChannel(True),
            MaintenanceChannel("White"),
            ZoomChannel(True),
            ToggleFlagsChannel({"Turn On": 131, "Turn Off": 231}),
        ],
        1,
        411,
    )


def test_empty_patch_rejected():
    with pytest.raises(EmptyPatchError):
        Fixture(1, "x", [], 1, 1)


def test_duplicate_channel_type_rejected():
    with pytest.raises(DuplicateChannelTypeError):
        Fixture(1, "x", [IntensityChannel(), IntensityChannel(True)], 1, 1)


def test_address_bandwidth_is_sum_of_channels():
    fixture = make_wash()
    assert fixture.address_bandwidth == sum(c.address_bandwidth() for c in fixture.patch)


def test_channel_types_sorted_and_complete():
    fixture = make_wash()
    assert list(fixture.channel_types) == sorted(c.type_id() for c in fixture.patch)
    assert FIXTURE_CHANNEL_COLOR_ID in fixture.channel_types


def test_missing_intensity_raises():
    fixture = Fixture(1, "x", [StrobeChannel()], 1, 1)
    with pytest.raises(ChannelNotFoundError) as info:
        fixture.intensity()
    assert info.value.channel == "Intensity"


def test_set_intensity_and_home():
    fixture = make_wash()
    assert fixture.is_home()
    fixture.set_intensity(0.75)
    assert fixture.intensity() == 0.75
    assert not fixture.is_home()
    fixture.home()
    assert fixture.is_home()
    assert fixture.intensity() == 0.0


def test_color_and_position_setters():
    fixture = make_wash()
    fixture.set_color(Rgbw(1.0, 0.5, 0.25, 0.0))
    fixture.set_position_pan_tilt(PanTilt(0.2, 0.8))
    assert fixture.color() == Rgbw(1.0, 0.5, 0.25, 0.0)
    assert fixture.position_pan_tilt() == PanTilt(0.2, 0.8)


def test_color_missing_raises():
    fixture = Fixture(1, "x", [IntensityChannel()], 1, 1)
    with pytest.raises(ChannelNotFoundError):
        fixture.set_color(Rgbw())
    with pytest.raises(ChannelNotFoundError):
        fixture.position_pan_tilt()


def test_maintenance_roundtrip_and_unknown():
    fixture = make_wash()
    fixture.set_maintenance("White", 42)
    assert fixture.maintenance("White") == 42
    with pytest.raises(ChannelNotFoundError) as info:
        fixture.maintenance("Nope")
    assert info.value.channel == "Nope"


def test_toggle_flags():
    fixture = make_wash()
    assert sorted(fixture.toggle_flags()) == ["Turn Off", "Turn On"]
    fixture.set_toggle_flag("Turn On")
    assert fixture.generate_data_packet(None)[-1] == 131
    fixture.unset_toggle_flags()
    assert fixture.generate_data_packet(None)[-1] == 0
    with pytest.raises(ChannelNotFoundError):
        fixture.set_toggle_flag("Explode")


def test_channel_single_value():
    fixture = make_wash()
    fixture.set_channel_single_value(FIXTURE_CHANNEL_STROBE, 0.3)
    assert fixture.channel_single_value(FIXTURE_CHANNEL_STROBE) == 0.3
    with pytest.raises(ChannelNotFoundError):
        fixture.channel_single_value(FIXTURE_CHANNEL_COLOR_ID)
    with pytest.raises(ChannelNotFoundError):
        fixture.set_channel_single_value(999, 0.1)


def test_channel_name():
    fixture = make_wash()
    assert fixture.channel_name(FIXTURE_CHANNEL_INTENSITY_ID) == "Intensity"
    with pytest.raises(ChannelNotFoundError):
        fixture.channel_name(999)


def test_update_channel_stores_copy():
    fixture = make_wash()
    channel = IntensityChannel(True, 0.5)
    fixture.update_channel(channel)
    channel.value = 0.9
    assert fixture.intensity() == 0.5


def test_update_channel_missing_type():
    fixture = Fixture(1, "x", [IntensityChannel()], 1, 1)
    with pytest.raises(ChannelNotFoundError):
        fixture.update_channel(StrobeChannel(0.5))


def test_update_channels_applies_in_order_and_stops_on_error():
    fixture = Fixture(1, "x", [IntensityChannel(), StrobeChannel()], 1, 1)
    fixture.update_channels([IntensityChannel(False, 0.4), StrobeChannel(0.6)])
    assert fixture.intensity() == 0.4
    assert fixture.channel_single_value(FIXTURE_CHANNEL_STROBE) == 0.6
    with pytest.raises(ChannelNotFoundError):
        fixture.update_channels([IntensityChannel(False, 0.1), ZoomChannel()])
    assert fixture.intensity() == 0.1


def test_generate_data_packet_concatenates_channels():
    fixture = Fixture(1, "x", [IntensityChannel(False, 1.0), StrobeChannel()], 1, 1)
    assert fixture.generate_data_packet(None) == [255, 0]


def test_generate_data_packet_length_matches_bandwidth():
    fixture = make_wash()
    fixture.set_intensity(0.5)
    assert len(fixture.generate_data_packet(None)) == fixture.address_bandwidth


def test_describe_intensity_only():
    fixture = Fixture(3, "PAR", [IntensityChannel(False, 0.5)], 1, 8)
    assert fixture.describe(None) == "PAR\n3 (U1.8)\n\n50%"


def test_describe_includes_color_and_position():
    fixture = make_wash()
    text = fixture.describe(None)
    lines = text.split("\n")
    assert lines[0] == "WASH 1"
    assert lines[1] == "1 (U1.411)"
    assert lines[4] == Rgbw().describe(None)
    assert lines[5] == PanTilt().describe(None)