"""Fixture channels, the values they hold and their DMX encoding."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from .errors import PresetHandlerError

FIXTURE_CHANNEL_INTENSITY_ID = 0
FIXTURE_CHANNEL_STROBE = 1
FIXTURE_CHANNEL_ZOOM = 2
FIXTURE_CHANNEL_COLOR_ID = 10
FIXTURE_CHANNEL_POSITION_PAN_TILT_ID = 20
FIXTURE_CHANNEL_TOGGLE_FLAGS = 30

_CHANNEL_NAMES = {
    FIXTURE_CHANNEL_INTENSITY_ID: "Intensity",
    FIXTURE_CHANNEL_STROBE: "Strobe",
    FIXTURE_CHANNEL_ZOOM: "Zoom",
    FIXTURE_CHANNEL_COLOR_ID: "ColorRGB",
    FIXTURE_CHANNEL_POSITION_PAN_TILT_ID: "PositionPanTilt",
    FIXTURE_CHANNEL_TOGGLE_FLAGS: "ToggleFlags",
}

_MASK64 = (1 << 64) - 1


def _rotl(value: int, bits: int) -> int:
    return ((value << bits) | (value >> (64 - bits))) & _MASK64


def _sip_round(v0: int, v1: int, v2: int, v3: int) -> Tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def stable_hash(text: str) -> int:
    """Return a 64-bit SipHash-1-3 (zero key) of a string, stable across runs."""
    data = text.encode("utf-8") + b"\xff"
    v0 = 0x736F6D6570736575
    v1 = 0x646F72616E646F6D
    v2 = 0x6C7967656E657261
    v3 = 0x7465646279746573

    body_len = len(data) - len(data) % 8
    for offset in range(0, body_len, 8):
        word = int.from_bytes(data[offset : offset + 8], "little")
        v3 ^= word
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        v0 ^= word

    last = ((len(data) & 0xFF) << 56) | int.from_bytes(data[body_len:], "little")
    v3 ^= last
    v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    v0 ^= last

    v2 ^= 0xFF
    for _ in range(3):
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    return v0 ^ v1 ^ v2 ^ v3


def channel_name_by_id(channel_id: int) -> str:
    """Return the display name of a built-in channel type, or "Unknown"."""
    return _CHANNEL_NAMES.get(channel_id, "Unknown")


def _format_float(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _to_u8(value: float) -> int:
    """Truncate to a byte, saturating at the ends and mapping NaN to 0."""
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


def _coarse_and_fine(value: float) -> Tuple[int, int]:
    coarse = _to_u8(value * 255.0)
    fine = _to_u8((value * 255.0 - coarse) * 255.0)
    return coarse, fine


@dataclass(frozen=True)
class ColorPresetRef:
    """A colour taken from a recorded colour preset."""

    preset_id: int

    def describe(self, preset_handler: Any) -> str:
        try:
            return preset_handler.get_color(self.preset_id).name
        except PresetHandlerError:
            return "Preset not found"


@dataclass(frozen=True)
class Rgbw:
    """A direct colour value, each component in 0.0..1.0."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0
    w: float = 0.0

    def describe(self, preset_handler: Any) -> str:
        return ", ".join(_format_float(c * 255.0) for c in (self.r, self.g, self.b, self.w))


ColorValue = Union[ColorPresetRef, Rgbw]


def color_from_rgb(rgb: Sequence[float]) -> Rgbw:
    """Build an RGBW value from three RGB components with white set to zero."""
    r, g, b = rgb
    return Rgbw(r, g, b, 0.0)


@dataclass(frozen=True)
class PositionPresetRef:
    """A position taken from a recorded position preset."""

    preset_id: int

    def describe(self, preset_handler: Any) -> str:
        try:
            return preset_handler.get_position(self.preset_id).name
        except PresetHandlerError:
            return "Preset not found"


@dataclass(frozen=True)
class PanTilt:
    """A direct pan/tilt position, each axis in 0.0..1.0."""

    pan: float = 0.0
    tilt: float = 0.0

    def describe(self, preset_handler: Any) -> str:
        return f"{_format_float(self.pan * 255.0)}, {_format_float(self.tilt * 255.0)}"


PositionValue = Union[PositionPresetRef, PanTilt]


class FixtureChannel(ABC):
    """One logical channel of a fixture patch."""

    @abstractmethod
    def home(self) -> None:
        """Reset the channel to its home value."""

    @abstractmethod
    def is_home(self) -> bool:
        """Whether the channel holds its home value."""

    @abstractmethod
    def address_bandwidth(self) -> int:
        """Number of DMX addresses the channel occupies."""

    @abstractmethod
    def type_id(self) -> int:
        """Identifier of the channel type, unique within a fixture."""

    def name(self) -> str:
        return channel_name_by_id(self.type_id())

    @abstractmethod
    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        """Encode the channel value as DMX bytes."""


def _single(is_fine: bool, value: float) -> List[int]:
    coarse, fine = _coarse_and_fine(value)
    return [coarse, fine] if is_fine else [coarse]


@dataclass
class IntensityChannel(FixtureChannel):
    is_fine: bool = False
    value: float = 0.0

    def home(self) -> None:
        self.value = 0.0

    def is_home(self) -> bool:
        return self.value == 0.0

    def address_bandwidth(self) -> int:
        return 2 if self.is_fine else 1

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_INTENSITY_ID

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        return _single(self.is_fine, self.value)


@dataclass
class StrobeChannel(FixtureChannel):
    value: float = 0.0

    def home(self) -> None:
        self.value = 0.0

    def is_home(self) -> bool:
        return self.value == 0.0

    def address_bandwidth(self) -> int:
        return 1

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_STROBE

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        return [_to_u8(self.value * 255.0)]


@dataclass
class ZoomChannel(FixtureChannel):
    is_fine: bool = False
    value: float = 0.0

    def home(self) -> None:
        self.value = 0.0

    def is_home(self) -> bool:
        return self.value == 0.0

    def address_bandwidth(self) -> int:
        return 2 if self.is_fine else 1

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_ZOOM

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        return _single(self.is_fine, self.value)


@dataclass
class ColorRgbChannel(FixtureChannel):
    is_fine: bool = False
    value: ColorValue = field(default_factory=Rgbw)

    def home(self) -> None:
        self.value = Rgbw()

    def is_home(self) -> bool:
        return self.value == Rgbw()

    def address_bandwidth(self) -> int:
        return 6 if self.is_fine else 3

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_COLOR_ID

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        if isinstance(self.value, Rgbw):
            components = (self.value.r, self.value.g, self.value.b)
        else:
            resolved = preset_handler.get_color_for_fixture(self.value.preset_id, fixture_id)
            components = tuple(resolved[:3]) if resolved is not None else (0.0, 0.0, 0.0)
        packet: List[int] = []
        for component in components:
            packet.extend(_single(self.is_fine, component))
        return packet


@dataclass
class PositionPanTiltChannel(FixtureChannel):
    is_fine: bool = False
    value: PositionValue = field(default_factory=PanTilt)

    def home(self) -> None:
        self.value = PanTilt()

    def is_home(self) -> bool:
        return self.value == PanTilt()

    def address_bandwidth(self) -> int:
        return 4 if self.is_fine else 2

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_POSITION_PAN_TILT_ID

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        if isinstance(self.value, PanTilt):
            axes = (self.value.pan, self.value.tilt)
        else:
            resolved = preset_handler.get_position_for_fixture(self.value.preset_id, fixture_id)
            axes = tuple(resolved[:2]) if resolved is not None else (0.0, 0.0)
        packet: List[int] = []
        for axis in axes:
            packet.extend(_single(self.is_fine, axis))
        return packet


@dataclass
class MaintenanceChannel(FixtureChannel):
    """A raw single-byte channel identified by its name."""

    channel_name: str
    value: int = 0
    channel_id: int = field(init=False)

    def __post_init__(self) -> None:
        self.channel_id = stable_hash(self.channel_name) & 0xFFFF

    def home(self) -> None:
        self.value = 0

    def is_home(self) -> bool:
        return self.value == 0

    def address_bandwidth(self) -> int:
        return 1

    def type_id(self) -> int:
        return self.channel_id

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        return [self.value]


@dataclass
class ToggleFlagsChannel(FixtureChannel):
    """A channel that outputs the byte of whichever named flag is active."""

    flags: Dict[str, int] = field(default_factory=dict)
    active: Optional[str] = None

    def home(self) -> None:
        self.active = None

    def is_home(self) -> bool:
        return self.active is None

    def address_bandwidth(self) -> int:
        return 1

    def type_id(self) -> int:
        return FIXTURE_CHANNEL_TOGGLE_FLAGS

    def generate_data_packet(self, fixture_id: int, preset_handler: Any) -> List[int]:
        if self.active is None:
            return [0]
        return [self.flags.get(self.active, 0)]