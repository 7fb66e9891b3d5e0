"""Cues, sequences of cues and their playback."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .channel import FixtureChannel
from .errors import FixtureNotFoundError


@dataclass
class Cue:
    """Channel values to apply, keyed by fixture id."""

    data: Dict[int, List[FixtureChannel]] = field(default_factory=dict)

    def data_for_fixture(self, fixture_id: int) -> Optional[List[FixtureChannel]]:
        return self.data.get(fixture_id)


@dataclass
class Sequence:
    """An ordered list of cues."""

    id: int
    cues: List[Cue] = field(default_factory=list)

    def add_cue(self, cue: Cue) -> None:
        self.cues.append(cue)

    def cue(self, idx: int) -> Cue:
        return self.cues[idx]


class SequenceRuntime:
    """Plays a sequence, applying each cue once when it becomes current."""

    def __init__(self, sequence: Sequence) -> None:
        self.sequence = sequence
        self.current_cue = 0
        self.prev_cue = len(sequence.cues)
        self.started = False

    def update(self, fixture_handler: Any, preset_handler: Any, delta_time: float) -> None:
        if not self.started or self.current_cue == self.prev_cue:
            return

        self.prev_cue = self.current_cue
        for fixture_id, channels in self.sequence.cue(self.current_cue).data.items():
            fixture = fixture_handler.fixture(fixture_id)
            if fixture is None:
                raise FixtureNotFoundError(fixture_id)
            fixture.update_channels(channels)

    def play(self) -> None:
        self.started = True

    def next_cue(self) -> None:
        self.current_cue += 1
        if self.current_cue >= len(self.sequence.cues):
            self.current_cue = 0