"""Fixture selectors: expressions that resolve to lists of fixture ids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Union

from .errors import FixtureSelectorError, PresetHandlerError


@dataclass(frozen=True)
class SingleFixture:
    """Selects exactly one fixture."""

    fixture_id: int

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        return [self.fixture_id]


@dataclass(frozen=True)
class FixtureRange:
    """Selects every fixture id from ``begin`` to ``end`` inclusive."""

    begin: int
    end: int

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        return list(range(self.begin, self.end + 1))


@dataclass(frozen=True)
class GroupRef:
    """Selects the fixtures of a recorded group."""

    group_id: int

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        try:
            group = preset_handler.get_group(self.group_id)
        except PresetHandlerError as error:
            raise FixtureSelectorError(error) from error
        return group.get_fixtures(preset_handler)


@dataclass(frozen=True)
class SelectorGroup:
    """A parenthesised selector used as an atomic part of a larger one."""

    selector: "FixtureSelector"

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        return self.selector.get_fixtures(preset_handler)


AtomicFixtureSelector = Union[SingleFixture, FixtureRange, GroupRef, SelectorGroup]


@dataclass(frozen=True)
class Atomic:
    """A selector made of one atomic part."""

    selector: AtomicFixtureSelector

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        return self.selector.get_fixtures(preset_handler)


@dataclass(frozen=True)
class Additive:
    """Fixtures of ``first`` followed by those of ``rest``."""

    first: AtomicFixtureSelector
    rest: "FixtureSelector"

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        return self.first.get_fixtures(preset_handler) + self.rest.get_fixtures(
            preset_handler
        )


@dataclass(frozen=True)
class Subtractive:
    """Fixtures of ``first`` that are not selected by ``rest``."""

    first: AtomicFixtureSelector
    rest: "FixtureSelector"

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        fixtures = self.first.get_fixtures(preset_handler)
        removed = set(self.rest.get_fixtures(preset_handler))
        return [f for f in fixtures if f not in removed]


@dataclass(frozen=True)
class Modulus:
    """Every ``divisor``-th fixture of a selection, or all others if inverted."""

    selector: AtomicFixtureSelector
    divisor: int
    invert: bool = False

    def get_fixtures(self, preset_handler: Any) -> List[int]:
        fixtures = self.selector.get_fixtures(preset_handler)
        return [
            fixture
            for index, fixture in enumerate(fixtures)
            if (index % self.divisor == 0) != self.invert
        ]


FixtureSelector = Union[Atomic, Additive, Subtractive, Modulus]