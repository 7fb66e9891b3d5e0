"""Commands that change fixtures and presets."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from .channel import ColorPresetRef, PanTilt, PositionPresetRef, Rgbw
from .errors import (
    ActionRunError,
    ChannelNotFoundError,
    FixtureError,
    FixtureHandlerError,
    FixtureSelectorError,
    PresetHandlerError,
)
from .handler import FixtureHandler
from .presets import PresetHandler
from .selector import FixtureSelector

_WRAPPED_ERRORS = (
    FixtureError,
    FixtureHandlerError,
    PresetHandlerError,
    FixtureSelectorError,
)


@contextmanager
def _wrapped() -> Iterator[None]:
    """Re-raise domain errors as ActionRunError."""
    try:
        yield
    except _WRAPPED_ERRORS as error:
        raise ActionRunError(error) from error


def _to_byte(value: float) -> int:
    if math.isnan(value) or value <= 0:
        return 0
    if value >= 255:
        return 255
    return int(value)


def _selected(selector: FixtureSelector, fixture_handler: FixtureHandler,
              preset_handler: PresetHandler):
    """Yield the known fixtures a selector resolves to, skipping unknown ids."""
    for fixture_id in selector.get_fixtures(preset_handler):
        fixture = fixture_handler.fixture(fixture_id)
        if fixture is not None:
            yield fixture


@dataclass(frozen=True)
class ActionRunResult:
    """Outcome of a successfully run action."""


class Action(ABC):
    """A command that can be run against the fixture and preset state."""

    @abstractmethod
    def run(self, fixture_handler: FixtureHandler,
            preset_handler: PresetHandler) -> ActionRunResult:
        """Apply the action; raise ActionRunError on failure."""


@dataclass(frozen=True)
class SetIntensity(Action):
    """Set intensity in percent (0..100) on the selected fixtures."""

    selector: FixtureSelector
    intensity: float

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            for fixture in list(_selected(self.selector, fixture_handler, preset_handler)):
                fixture.set_intensity(self.intensity / 100.0)
        return ActionRunResult()


@dataclass(frozen=True)
class SetColor(Action):
    """Set a direct RGBW colour on the selected fixtures that have one."""

    selector: FixtureSelector
    rgbw: Tuple[float, float, float, float]

    def run(self, fixture_handler, preset_handler):
        color = Rgbw(*self.rgbw)
        with _wrapped():
            for fixture in list(_selected(self.selector, fixture_handler, preset_handler)):
                try:
                    fixture.set_color(color)
                except ChannelNotFoundError:
                    continue
        return ActionRunResult()


@dataclass(frozen=True)
class SetColorPreset(Action):
    """Point the selected fixtures' colour at a recorded colour preset."""

    selector: FixtureSelector
    preset_id: int

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            fixtures = list(_selected(self.selector, fixture_handler, preset_handler))
            preset = preset_handler.get_color(self.preset_id)
            for fixture in fixtures:
                try:
                    fixture.set_color(ColorPresetRef(preset.id))
                except ChannelNotFoundError:
                    continue
        return ActionRunResult()


@dataclass(frozen=True)
class SetPosition(Action):
    """Set a direct pan/tilt position on the selected fixtures that have one."""

    selector: FixtureSelector
    position: Tuple[float, float]

    def run(self, fixture_handler, preset_handler):
        value = PanTilt(*self.position)
        with _wrapped():
            for fixture in list(_selected(self.selector, fixture_handler, preset_handler)):
                try:
                    fixture.set_position_pan_tilt(value)
                except ChannelNotFoundError:
                    continue
        return ActionRunResult()


@dataclass(frozen=True)
class SetPositionPreset(Action):
    """Point the selected fixtures' position at a recorded position preset."""

    selector: FixtureSelector
    preset_id: int

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            fixtures = list(_selected(self.selector, fixture_handler, preset_handler))
            preset = preset_handler.get_position(self.preset_id)
            for fixture in fixtures:
                try:
                    fixture.set_position_pan_tilt(PositionPresetRef(preset.id))
                except ChannelNotFoundError:
                    continue
        return ActionRunResult()


@dataclass(frozen=True)
class GoHome(Action):
    """Reset every channel of the selected fixtures."""

    selector: FixtureSelector

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            for fixture in list(_selected(self.selector, fixture_handler, preset_handler)):
                fixture.home()
        return ActionRunResult()


@dataclass(frozen=True)
class GoHomeAll(Action):
    """Reset every channel of every fixture."""

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            fixture_handler.home_all()
        return ActionRunResult()


@dataclass(frozen=True)
class ManSet(Action):
    """Set a named maintenance channel in percent (0..100)."""

    selector: FixtureSelector
    channel_name: str
    value: float

    def run(self, fixture_handler, preset_handler):
        byte = _to_byte((self.value / 100.0) * 255.0)
        with _wrapped():
            for fixture in list(_selected(self.selector, fixture_handler, preset_handler)):
                fixture.set_maintenance(self.channel_name, byte)
        return ActionRunResult()


@dataclass(frozen=True)
class RecordGroup(Action):
    """Store a selector as a group."""

    selector: FixtureSelector
    id: int

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.record_group(self.selector, self.id)
        return ActionRunResult()


@dataclass(frozen=True)
class RecordColor(Action):
    """Capture the selected fixtures' colours as a preset."""

    selector: FixtureSelector
    id: int

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.record_color(self.selector, self.id, fixture_handler)
        return ActionRunResult()


@dataclass(frozen=True)
class RecordPosition(Action):
    """Capture the selected fixtures' positions as a preset."""

    selector: FixtureSelector
    id: int

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.record_position(self.selector, self.id, fixture_handler)
        return ActionRunResult()


@dataclass(frozen=True)
class RenameGroup(Action):
    id: int
    new_name: str

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.rename_group(self.id, self.new_name)
        return ActionRunResult()


@dataclass(frozen=True)
class RenameColorPreset(Action):
    id: int
    new_name: str

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.rename_color(self.id, self.new_name)
        return ActionRunResult()


@dataclass(frozen=True)
class RenamePositionPreset(Action):
    id: int
    new_name: str

    def run(self, fixture_handler, preset_handler):
        with _wrapped():
            preset_handler.rename_position(self.id, self.new_name)
        return ActionRunResult()


@dataclass(frozen=True)
class SelectFixtures(Action):
    """Make a selector the current selection; changes no fixture state."""

    selector: FixtureSelector

    def run(self, fixture_handler, preset_handler):
        return ActionRunResult()


@dataclass(frozen=True)
class ClearAll(Action):
    """Clear the current selection; changes no fixture state."""

    def run(self, fixture_handler, preset_handler):
        return ActionRunResult()


@dataclass(frozen=True)
class Test(Action):
    """A diagnostic command handled by the session; changes no fixture state."""

    command: str

    __test__ = False

    def run(self, fixture_handler, preset_handler):
        return ActionRunResult()


__all_actions__: List[type] = [
    SetIntensity, SetColor, SetColorPreset, SetPosition, SetPositionPreset,
    GoHome, GoHomeAll, ManSet, RecordGroup, RecordColor, RecordPosition,
    RenameGroup, RenameColorPreset, RenamePositionPreset, SelectFixtures,
    ClearAll, Test,
]