"""Recorded groups, colour and position presets, and stored sequences."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .channel import (
    FIXTURE_CHANNEL_COLOR_ID,
    FIXTURE_CHANNEL_POSITION_PAN_TILT_ID,
    PanTilt,
    Rgbw,
)
from .errors import PresetAlreadyExistsError, PresetNotFoundError
from .sequence import Sequence

RgbwTuple = Tuple[float, float, float, float]
PanTiltTuple = Tuple[float, float]


@dataclass
class FixtureGroup:
    """A named, stored fixture selector."""

    id: int
    fixture_selector: Any
    name: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            self.name = f"Group {self.id}"

    def get_fixtures(self, preset_handler: "PresetHandler") -> List[int]:
        return self.fixture_selector.get_fixtures(preset_handler)


def _selected_fixtures(fixture_selector, preset_handler, fixture_handler, type_id):
    for fixture_id in fixture_selector.get_fixtures(preset_handler):
        fixture = fixture_handler.fixture(fixture_id)
        if fixture is None or type_id not in fixture.channel_types:
            continue
        yield fixture_id, fixture


@dataclass
class FixtureColorPreset:
    """Per-fixture RGBW values captured from the live state."""

    id: int
    name: str
    colors: Dict[int, RgbwTuple] = field(default_factory=dict)

    @classmethod
    def record(
        cls,
        id: int,
        fixture_selector: Any,
        preset_handler: "PresetHandler",
        fixture_handler: Any,
    ) -> "FixtureColorPreset":
        colors: Dict[int, RgbwTuple] = {}
        for fixture_id, fixture in _selected_fixtures(
            fixture_selector, preset_handler, fixture_handler, FIXTURE_CHANNEL_COLOR_ID
        ):
            value = fixture.color()
            if isinstance(value, Rgbw):
                rgbw = (value.r, value.g, value.b, value.w)
            else:
                resolved = preset_handler.get_color_for_fixture(value.preset_id, fixture_id)
                rgbw = resolved if resolved is not None else (0.0, 0.0, 0.0, 0.0)
            colors[fixture_id] = rgbw
        return cls(id=id, name=f"Color Preset {id}", colors=colors)

    def color(self, fixture_id: int) -> Optional[RgbwTuple]:
        return self.colors.get(fixture_id)


@dataclass
class FixturePositionPreset:
    """Per-fixture pan/tilt values captured from the live state."""

    id: int
    name: str
    positions: Dict[int, PanTiltTuple] = field(default_factory=dict)

    @classmethod
    def record(
        cls,
        id: int,
        fixture_selector: Any,
        preset_handler: "PresetHandler",
        fixture_handler: Any,
    ) -> "FixturePositionPreset":
        positions: Dict[int, PanTiltTuple] = {}
        for fixture_id, fixture in _selected_fixtures(
            fixture_selector,
            preset_handler,
            fixture_handler,
            FIXTURE_CHANNEL_POSITION_PAN_TILT_ID,
        ):
            value = fixture.position_pan_tilt()
            if isinstance(value, PanTilt):
                pan_tilt = (value.pan, value.tilt)
            else:
                resolved = preset_handler.get_position_for_fixture(
                    value.preset_id, fixture_id
                )
                pan_tilt = resolved if resolved is not None else (0.0, 0.0)
            positions[fixture_id] = pan_tilt
        return cls(id=id, name=f"Position Preset {id}", positions=positions)

    def position(self, fixture_id: int) -> Optional[PanTiltTuple]:
        return self.positions.get(fixture_id)


class PresetHandler:
    """Stores groups, colour and position presets, and sequences by id."""

    def __init__(self) -> None:
        self.groups: Dict[int, FixtureGroup] = {}
        self.colors: Dict[int, FixtureColorPreset] = {}
        self.positions: Dict[int, FixturePositionPreset] = {}
        self.sequences: Dict[int, Sequence] = {}

    def record_group(self, fixture_selector: Any, id: int) -> None:
        if id in self.groups:
            raise PresetAlreadyExistsError(id)
        self.groups[id] = FixtureGroup(id, fixture_selector)

    def get_group(self, id: int) -> FixtureGroup:
        try:
            return self.groups[id]
        except KeyError:
            raise PresetNotFoundError(id) from None

    def rename_group(self, id: int, new_name: str) -> None:
        self.get_group(id).name = new_name

    def record_color(self, fixture_selector: Any, id: int, fixture_handler: Any) -> None:
        if id in self.colors:
            raise PresetAlreadyExistsError(id)
        self.colors[id] = FixtureColorPreset.record(
            id, fixture_selector, self, fixture_handler
        )

    def get_color(self, id: int) -> FixtureColorPreset:
        try:
            return self.colors[id]
        except KeyError:
            raise PresetNotFoundError(id) from None

    def get_color_for_fixture(self, preset_id: int, fixture_id: int) -> Optional[RgbwTuple]:
        preset = self.colors.get(preset_id)
        return preset.color(fixture_id) if preset is not None else None

    def rename_color(self, id: int, new_name: str) -> None:
        self.get_color(id).name = new_name

    def record_position(self, fixture_selector: Any, id: int, fixture_handler: Any) -> None:
        if id in self.positions:
            raise PresetAlreadyExistsError(id)
        self.positions[id] = FixturePositionPreset.record(
            id, fixture_selector, self, fixture_handler
        )

    def get_position(self, id: int) -> FixturePositionPreset:
        try:
            return self.positions[id]
        except KeyError:
            raise PresetNotFoundError(id) from None

    def get_position_for_fixture(
        self, preset_id: int, fixture_id: int
    ) -> Optional[PanTiltTuple]:
        preset = self.positions.get(preset_id)
        return preset.position(fixture_id) if preset is not None else None

    def rename_position(self, id: int, new_name: str) -> None:
        self.get_position(id).name = new_name

    def add_sequence(self, sequence: Sequence) -> None:
        self.sequences[sequence.id] = sequence

    def sequence(self, id: int) -> Optional[Sequence]:
        return self.sequences.get(id)