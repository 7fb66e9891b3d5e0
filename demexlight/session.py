"""A running show: fixtures, presets, the current selection and playback."""

from __future__ import annotations

import copy
import logging
import time
from typing import List, Optional

from .actions import Action, ActionRunResult, ClearAll, SelectFixtures, Test
from .channel import (
    ColorRgbChannel,
    IntensityChannel,
    MaintenanceChannel,
    PositionPanTiltChannel,
    StrobeChannel,
    ToggleFlagsChannel,
    ZoomChannel,
)
from .dmx import DebugDummyOutput
from .errors import FixtureHandlerError, PresetNotFoundError
from .fixture import Fixture
from .handler import FixtureHandler
from .presets import PresetHandler
from .selector import Atomic, FixtureRange, FixtureSelector
from .sequence import Cue, Sequence, SequenceRuntime

logger = logging.getLogger(__name__)

_DEMO_SEQUENCE_ID = 1


def _wash(fixture_id: int) -> Fixture:
    patch = [
        PositionPanTiltChannel(is_fine=True),
        IntensityChannel(is_fine=True),
        StrobeChannel(),
        ColorRgbChannel(is_fine=True),
        MaintenanceChannel("White"),
        MaintenanceChannel("WhiteFine"),
        MaintenanceChannel("ColorTemp"),
        MaintenanceChannel("ColorTint"),
        MaintenanceChannel("ColorMacro"),
        MaintenanceChannel("ColorMacroCrossfade"),
        ZoomChannel(is_fine=True),
        MaintenanceChannel("PanTiltSpeed"),
        ToggleFlagsChannel({"Turn On": 131, "Turn Off": 231}),
    ]
    return Fixture(fixture_id, f"WASH {fixture_id}", patch, 1, (fixture_id - 1) * 40 + 411)


def build_demo_fixture_handler() -> FixtureHandler:
    """Two washes and eight single-channel PARs on universe 1."""
    fixtures = [_wash(fixture_id) for fixture_id in (1, 2)]
    fixtures.extend(
        Fixture(i + 3, f"PAR {i + 2}", [IntensityChannel(is_fine=False)], 1, 8 - i)
        for i in range(8)
    )
    return FixtureHandler([DebugDummyOutput(verbose=True)], fixtures)


def build_demo_preset_handler() -> PresetHandler:
    """Groups for the demo rig and a four-cue chase as sequence 1."""
    presets = PresetHandler()

    presets.record_group(Atomic(FixtureRange(1, 2)), 1)
    presets.rename_group(1, "Washes")
    presets.record_group(Atomic(FixtureRange(3, 10)), 2)
    presets.rename_group(2, "PARs")

    sequence = Sequence(_DEMO_SEQUENCE_ID)
    for fixture_id, level in ((1, 1.0), (2, 1.0), (1, 0.0), (2, 0.0)):
        sequence.add_cue(Cue({fixture_id: [IntensityChannel(is_fine=True, value=level)]}))
    presets.add_sequence(sequence)

    return presets


class Session:
    """Holds show state and runs actions against it."""

    def __init__(self, fixture_handler: FixtureHandler, preset_handler: PresetHandler) -> None:
        self.fixture_handler = fixture_handler
        self.preset_handler = preset_handler
        self.global_fixture_select: Optional[FixtureSelector] = None
        self.sequence_runtimes: List[SequenceRuntime] = []

    def _demo_sequence(self) -> Sequence:
        sequence = self.preset_handler.sequence(_DEMO_SEQUENCE_ID)
        if sequence is None:
            raise PresetNotFoundError(_DEMO_SEQUENCE_ID)
        return sequence

    def run_action(self, action: Action) -> ActionRunResult:
        """Update session state for the action, then run it."""
        if isinstance(action, SelectFixtures):
            self.global_fixture_select = action.selector
        elif isinstance(action, ClearAll):
            self.global_fixture_select = None
        elif isinstance(action, Test):
            if action.command == "start":
                runtime = SequenceRuntime(copy.deepcopy(self._demo_sequence()))
                self.sequence_runtimes.append(runtime)
                runtime.play()
            elif action.command == "next":
                if not self.sequence_runtimes:
                    raise IndexError("no sequence is running")
                self.sequence_runtimes[-1].next_cue()
            self._demo_sequence()

        started = time.perf_counter()
        result = action.run(self.fixture_handler, self.preset_handler)
        logger.debug(
            "Execution of action %r took %.2fms",
            action,
            (time.perf_counter() - started) * 1000.0,
        )
        return result

    def update(self, delta_time: float) -> None:
        """Push fixture state to outputs and advance sequence playback."""
        try:
            self.fixture_handler.update(self.preset_handler, delta_time)
        except FixtureHandlerError as error:
            logger.debug("fixture handler update failed: %s", error)

        for runtime in self.sequence_runtimes:
            runtime.update(self.fixture_handler, self.preset_handler, delta_time)