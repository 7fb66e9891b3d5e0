"""DMX output sinks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

UNIVERSE_SIZE = 512


class DMXOutput(ABC):
    """Something that accepts a full DMX universe of data."""

    @abstractmethod
    def send(self, universe: int, data: Sequence[int]) -> None:
        """Send 512 bytes of channel data for one universe."""


class DebugDummyOutput(DMXOutput):
    """Prints outgoing universes to standard output."""

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"DebugDummyOutput(verbose={self.verbose!r})"

    def send(self, universe: int, data: Sequence[int]) -> None:
        if self.verbose:
            print(f"Sending data on universe {universe}:\n{list(data)}")
        else:
            print(f"Sending data on universe {universe}")