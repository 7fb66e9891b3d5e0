"""A patched fixture: an ordered set of channels at a DMX address."""

from __future__ import annotations

import copy
from typing import Any, Iterable, List, Optional, Type, TypeVar

from .channel import (
    FIXTURE_CHANNEL_COLOR_ID,
    ColorRgbChannel,
    ColorValue,
    FixtureChannel,
    IntensityChannel,
    MaintenanceChannel,
    PositionPanTiltChannel,
    PositionValue,
    StrobeChannel,
    ToggleFlagsChannel,
    ZoomChannel,
)
from .errors import ChannelNotFoundError, DuplicateChannelTypeError, EmptyPatchError

_C = TypeVar("_C", bound=FixtureChannel)

_SINGLE_VALUE_CHANNELS = (IntensityChannel, StrobeChannel, ZoomChannel)


def _format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


class Fixture:
    """A lighting fixture with a validated channel patch."""

    def __init__(
        self,
        id: int,
        name: str,
        patch: List[FixtureChannel],
        universe: int,
        start_address: int,
    ) -> None:
        if not patch:
            raise EmptyPatchError()

        seen = set()
        for channel in patch:
            type_id = channel.type_id()
            if type_id in seen:
                raise DuplicateChannelTypeError()
            seen.add(type_id)

        self.id = id
        self.name = name
        self.patch = list(patch)
        self.universe = universe
        self.start_address = start_address
        self.address_bandwidth = sum(c.address_bandwidth() for c in self.patch)
        self.channel_types = tuple(sorted(seen))

    def __repr__(self) -> str:
        return (
            f"Fixture(id={self.id!r}, name={self.name!r}, universe={self.universe!r}, "
            f"start_address={self.start_address!r})"
        )

    def _find(self, kind: Type[_C]) -> Optional[_C]:
        return next((c for c in self.patch if isinstance(c, kind)), None)

    def _find_by_type_id(self, type_id: int) -> Optional[FixtureChannel]:
        return next((c for c in self.patch if c.type_id() == type_id), None)

    def _find_maintenance(self, name: str) -> MaintenanceChannel:
        channel = next(
            (
                c
                for c in self.patch
                if isinstance(c, MaintenanceChannel) and c.channel_name == name
            ),
            None,
        )
        if channel is None:
            raise ChannelNotFoundError(name)
        return channel

    def toggle_flags(self) -> List[str]:
        """Names of all toggle flags across the patch."""
        return [
            flag
            for channel in self.patch
            if isinstance(channel, ToggleFlagsChannel)
            for flag in channel.flags
        ]

    def generate_data_packet(self, preset_handler: Any) -> List[int]:
        """DMX bytes for the whole patch, in patch order."""
        return [
            byte
            for channel in self.patch
            for byte in channel.generate_data_packet(self.id, preset_handler)
        ]

    def is_home(self) -> bool:
        return all(c.is_home() for c in self.patch)

    def intensity(self) -> float:
        channel = self._find(IntensityChannel)
        if channel is None:
            raise ChannelNotFoundError("Intensity")
        return channel.value

    def color(self) -> ColorValue:
        channel = self._find(ColorRgbChannel)
        if channel is None:
            raise ChannelNotFoundError("Color")
        return channel.value

    def position_pan_tilt(self) -> PositionValue:
        channel = self._find(PositionPanTiltChannel)
        if channel is None:
            raise ChannelNotFoundError("PositionPanTilt")
        return channel.value

    def maintenance(self, name: str) -> int:
        return self._find_maintenance(name).value

    def channel_single_value(self, channel_id: int) -> float:
        channel = self._find_by_type_id(channel_id)
        if not isinstance(channel, _SINGLE_VALUE_CHANNELS):
            raise ChannelNotFoundError(None)
        return channel.value

    def home(self) -> None:
        for channel in self.patch:
            channel.home()

    def set_intensity(self, value: float) -> None:
        channel = self._find(IntensityChannel)
        if channel is None:
            raise ChannelNotFoundError("Intensity")
        channel.value = value

    def set_color(self, value: ColorValue) -> None:
        channel = self._find_by_type_id(FIXTURE_CHANNEL_COLOR_ID)
        if not isinstance(channel, ColorRgbChannel):
            raise ChannelNotFoundError("Color")
        channel.value = value

    def set_position_pan_tilt(self, value: PositionValue) -> None:
        channel = self._find(PositionPanTiltChannel)
        if channel is None:
            raise ChannelNotFoundError("PositionPanTilt")
        channel.value = value

    def set_maintenance(self, name: str, value: int) -> None:
        self._find_maintenance(name).value = value

    def set_toggle_flag(self, flag_name: str) -> None:
        channel = next(
            (
                c
                for c in self.patch
                if isinstance(c, ToggleFlagsChannel) and flag_name in c.flags
            ),
            None,
        )
        if channel is None:
            raise ChannelNotFoundError(flag_name)
        channel.active = flag_name

    def unset_toggle_flags(self) -> None:
        for channel in self.patch:
            if isinstance(channel, ToggleFlagsChannel):
                channel.active = None

    def set_channel_single_value(self, type_id: int, value: float) -> None:
        channel = self._find_by_type_id(type_id)
        if not isinstance(channel, _SINGLE_VALUE_CHANNELS):
            raise ChannelNotFoundError(None)
        channel.value = value

    def channel_name(self, type_id: int) -> str:
        channel = self._find_by_type_id(type_id)
        if channel is None:
            raise ChannelNotFoundError(None)
        return channel.name()

    def update_channel(self, channel: FixtureChannel) -> None:
        """Replace the channel of the same type with a copy of ``channel``."""
        type_id = channel.type_id()
        for index, existing in enumerate(self.patch):
            if existing.type_id() == type_id:
                self.patch[index] = copy.deepcopy(channel)
                return
        raise ChannelNotFoundError(f"Channel with ID {type_id}")

    def update_channels(self, channels: Iterable[FixtureChannel]) -> None:
        for channel in channels:
            self.update_channel(channel)

    def describe(self, preset_handler: Any) -> str:
        """Multi-line summary of name, address and current state."""
        state = ""
        try:
            state += f"{_format_float(self.intensity() * 100.0)}%"
        except ChannelNotFoundError:
            pass
        try:
            color = self.color()
        except ChannelNotFoundError:
            pass
        else:
            state += "\n" + color.describe(preset_handler)
        try:
            position = self.position_pan_tilt()
        except ChannelNotFoundError:
            pass
        else:
            state += "\n" + position.describe(preset_handler)

        return (
            f"{self.name}\n{self.id} (U{self.universe}.{self.start_address})\n\n{state}"
        )