"""Owns all fixtures and pushes their state to DMX outputs."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence, Set

from .dmx import UNIVERSE_SIZE, DMXOutput
from .errors import FixtureAddressOverlapError, FixtureHandlerUpdateError
from .fixture import Fixture


class FixtureHandler:
    """Holds the patched fixtures and the last data sent per universe."""

    def __init__(self, outputs: Sequence[DMXOutput], fixtures: Sequence[Fixture]) -> None:
        used: Dict[int, Set[int]] = {}
        for fixture in fixtures:
            start = fixture.start_address
            end = start + fixture.address_bandwidth - 1
            addresses = used.setdefault(fixture.universe, set())
            for address in range(start, end + 1):
                if address in addresses:
                    raise FixtureAddressOverlapError(fixture.universe, start, end)
                addresses.add(address)

        self.fixtures: List[Fixture] = list(fixtures)
        self.outputs: List[DMXOutput] = list(outputs)
        self.universe_output_data: Dict[int, bytearray] = {}
        self._grand_master = 255

    @property
    def grand_master(self) -> int:
        """Master dimmer applied to all output bytes, 0..255."""
        return self._grand_master

    @grand_master.setter
    def grand_master(self, value: int) -> None:
        if not 0 <= value <= 255:
            raise ValueError(f"grand master must be in 0..255, got {value}")
        self._grand_master = value

    def fixture(self, fixture_id: int) -> Optional[Fixture]:
        return next((f for f in self.fixtures if f.id == fixture_id), None)

    def home_all(self) -> None:
        for fixture in self.fixtures:
            fixture.home()

    def update(self, preset_handler: Any, delta_time: float) -> None:
        """Render every fixture and send universes whose data changed."""
        scale = self._grand_master / 255.0
        dirty: Set[int] = set()

        for fixture in self.fixtures:
            offset = fixture.start_address - 1
            data = bytes(
                int(byte * scale) for byte in fixture.generate_data_packet(preset_handler)
            )
            if offset < 0 or offset + len(data) > UNIVERSE_SIZE:
                raise IndexError(
                    f"fixture {fixture.id} does not fit in a universe of {UNIVERSE_SIZE}"
                )

            previous = self.universe_output_data.get(fixture.universe)
            if previous is not None and previous[offset : offset + len(data)] == data:
                continue

            universe_data = self.universe_output_data.setdefault(
                fixture.universe, bytearray(UNIVERSE_SIZE)
            )
            universe_data[offset : offset + len(data)] = data
            dirty.add(fixture.universe)

        for output in self.outputs:
            for universe, data in self.universe_output_data.items():
                if universe not in dirty:
                    continue
                try:
                    output.send(universe, bytes(data))
                except Exception as error:
                    raise FixtureHandlerUpdateError(error) from error