"""Exceptions raised by fixtures, handlers, presets, selectors and actions."""

from __future__ import annotations

from typing import Optional


class FixtureError(Exception):
    """Base class for errors raised by a single fixture."""


class ChannelNotFoundError(FixtureError):
    """A fixture has no channel of the requested kind."""

    def __init__(self, channel: Optional[str] = None) -> None:
        self.channel = channel
        super().__init__(f"Channel ({channel!r}) not found")


class EmptyPatchError(FixtureError):
    """A fixture was created without any channels."""

    def __init__(self) -> None:
        super().__init__("Patch is empty")


class DuplicateChannelTypeError(FixtureError):
    """A fixture patch holds two channels of the same type."""

    def __init__(self) -> None:
        super().__init__("Duplicate channel type")


class InvalidDataLengthError(FixtureError):
    """Channel data has the wrong length."""

    def __init__(self) -> None:
        super().__init__("Invalid data length")


class FixtureHandlerError(Exception):
    """Base class for errors raised by the fixture handler."""


class FixtureNotFoundError(FixtureHandlerError):
    """No fixture with the given id is known."""

    def __init__(self, fixture_id: int) -> None:
        self.fixture_id = fixture_id
        super().__init__(f"Fixture {fixture_id} not found")


class FixtureAlreadyExistsError(FixtureHandlerError):
    """A fixture with the same id is already known."""

    def __init__(self) -> None:
        super().__init__("Fixture already exists")


class FixtureHandlerUpdateError(FixtureHandlerError):
    """Sending data to an output failed during an update."""

    def __init__(self, error: BaseException) -> None:
        self.error = error
        super().__init__(f"Fixture handler update error: {error}")


class FixtureAddressOverlapError(FixtureHandlerError):
    """Two fixtures share DMX addresses in the same universe."""

    def __init__(self, universe: int, start: int, end: int) -> None:
        self.universe = universe
        self.start = start
        self.end = end
        super().__init__(f"Fixture address overlap (U{universe}): {start} - {end}")


class PresetHandlerError(Exception):
    """Base class for errors raised by the preset handler."""


class PresetAlreadyExistsError(PresetHandlerError):
    """A preset with the given id has already been recorded."""

    def __init__(self, preset_id: int) -> None:
        self.preset_id = preset_id
        super().__init__(f"Group with id {preset_id} already exists")


class PresetNotFoundError(PresetHandlerError):
    """No preset with the given id exists."""

    def __init__(self, preset_id: int) -> None:
        self.preset_id = preset_id
        super().__init__(f"Group with id {preset_id} not found")


class FixtureSelectorError(Exception):
    """Resolving a fixture selector failed."""

    def __init__(self, error: PresetHandlerError) -> None:
        self.error = error
        super().__init__(f"PresetHandlerError: {error}")


_ACTION_PREFIXES = (
    (FixtureHandlerError, "Fixture handler error"),
    (FixtureError, "Fixture error"),
    (PresetHandlerError, "Preset handler error"),
    (FixtureSelectorError, "Fixture selector error"),
)


class ActionRunError(Exception):
    """Running an action failed; wraps the underlying error."""

    def __init__(self, error: Exception) -> None:
        for kind, prefix in _ACTION_PREFIXES:
            if isinstance(error, kind):
                break
        else:
            raise TypeError(f"cannot wrap {type(error).__name__} in ActionRunError")
        self.error = error
        self.__cause__ = error
        super().__init__(f"{prefix}: {error}")